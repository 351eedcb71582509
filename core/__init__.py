# core/__init__.py
from .errors import (
    MomentumError, EmptyTaskTitle, MissingCredential, NetworkFailure,
    ServiceError, Unauthorized, EmptyReply, InvalidFormat,
)
from .llm_utils import LLMClient
from .normalization import normalize_breakdown, decode_icon, NormalizedReply
from .json_utils import JsonSerializer

__all__ = [
    'MomentumError', 'EmptyTaskTitle', 'MissingCredential', 'NetworkFailure',
    'ServiceError', 'Unauthorized', 'EmptyReply', 'InvalidFormat',
    'LLMClient',
    'normalize_breakdown', 'decode_icon', 'NormalizedReply',
    'JsonSerializer',
]
