from .playlist import PlaylistParser, parse_attributes, parse_master_playlist

__all__ = ["PlaylistParser", "parse_attributes", "parse_master_playlist"]
