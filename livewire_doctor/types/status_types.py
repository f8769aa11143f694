from enum import Enum


class ProcessingDirectory(str, Enum):
    PUBLIC = 'public'
    ROOT = 'root'
    UNKNOWN = 'unknown'


class RouteKind(str, Enum):
    ASSET = 'asset'
    UPDATE = 'update'


class CheckStatus(str, Enum):
    OK = 'ok'
    WARN = 'warn'
    ERROR = 'error'


__all__ = ['ProcessingDirectory', 'RouteKind', 'CheckStatus']
