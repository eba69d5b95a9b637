from .indexer import IndexerPort
from .tmdb import MetadataResolverPort

__all__ = [
    "IndexerPort",
    "MetadataResolverPort",
]
