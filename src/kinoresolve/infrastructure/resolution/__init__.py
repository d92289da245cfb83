from .candidates import split_candidates
from .pipeline import ProviderSettings, ResolutionPipeline, build_embed_url

__all__ = ["ProviderSettings", "ResolutionPipeline", "build_embed_url", "split_candidates"]
