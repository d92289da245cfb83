from .mpv import MpvPlayer

__all__ = ["MpvPlayer"]
