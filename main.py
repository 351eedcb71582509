# main.py
import sys
import asyncio
import argparse
import logging
from typing import List, Optional
from tqdm import tqdm

from config import Settings, load_settings
from decomposition import TaskDecomposer
from icon_classifier import IconClassifier, fallback_icon, select_icon_or_fallback
from task_board import TaskBoard
from core import JsonSerializer, LLMClient, MomentumError
from utils import render_checklist, save_markdown


def build_client(settings: Settings) -> LLMClient:
    return LLMClient.from_settings(settings)


def main(argv: Optional[List[str]] = None) -> int:
    """Command line entry point: break tasks down and pick icons."""
    ap = argparse.ArgumentParser(prog="momentum", description="AI task breakdown for a to-do list")
    ap.add_argument("--env-file", help="Load settings from this .env file")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    p_breakdown = sub.add_parser("breakdown", help="Split one task into subtasks")
    p_breakdown.add_argument("title")

    p_icon = sub.add_parser("icon", help="Pick an icon and color for a task")
    p_icon.add_argument("title")
    p_icon.add_argument("--offline", action="store_true", help="Use the keyword table only")

    p_plan = sub.add_parser("plan", help="Add several tasks, pick icons and break them all down")
    p_plan.add_argument("titles", nargs="+")
    p_plan.add_argument("--out", help="Write the board to a .json or .md file")

    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings(args.env_file)

    if args.command == "icon" and args.offline:
        icon = fallback_icon(args.title)
        print(f"{icon.symbol} {icon.color} (fallback)")
        return 0

    # icon falls back to the keyword table when there is no key.
    if args.command != "icon" and not settings.has_credential:
        sys.exit("❗ Set the OPENAI_API_KEY environment variable first.")

    handler = {"breakdown": run_breakdown, "icon": run_icon, "plan": run_plan}[args.command]
    try:
        return asyncio.run(_with_client(handler, args, settings))
    except MomentumError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1


async def _with_client(handler, args, settings: Settings) -> int:
    client = build_client(settings)
    try:
        return await handler(args, settings, client)
    finally:
        await client.close()


async def run_breakdown(args, settings: Settings, client: LLMClient) -> int:
    decomposer = TaskDecomposer.from_settings(settings, client)
    subtasks = await decomposer.breakdown(args.title)
    print(f"✅ Got {len(subtasks)} subtasks:\n")
    for index, st in enumerate(subtasks, start=1):
        print(f"{index}. {st.title} ({st.estimated_minutes} mins)")
    return 0


async def run_icon(args, settings: Settings, client: LLMClient) -> int:
    classifier = IconClassifier.from_settings(settings, client)
    icon, source = await select_icon_or_fallback(classifier, args.title)
    print(f"{icon.symbol} {icon.color} ({source})")
    return 0


async def _plan_one(board: TaskBoard, task) -> Optional[MomentumError]:
    await board.assign_icon(task)
    try:
        await board.break_down(task)
    except MomentumError as e:
        return e
    return None


async def run_plan(args, settings: Settings, client: LLMClient) -> int:
    board = TaskBoard(TaskDecomposer.from_settings(settings, client),
                      IconClassifier.from_settings(settings, client))
    tasks = [board.add_task(title) for title in args.titles]

    print(f"🚀 Planning {len(tasks)} tasks")
    failures = []
    jobs = [_plan_one(board, task) for task in tasks]
    for job in tqdm(asyncio.as_completed(jobs), total=len(jobs), desc="Breaking down", unit="task"):
        err = await job
        if err is not None:
            failures.append(err)

    print(render_checklist(board.tasks))
    for err in failures:
        print(f"❌ {err}", file=sys.stderr)

    if args.out:
        if args.out.endswith(".md"):
            save_markdown(render_checklist(board.tasks), args.out)
        else:
            JsonSerializer.save_json(board.tasks, args.out)
        print(f"📊 Board saved: {args.out}")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
