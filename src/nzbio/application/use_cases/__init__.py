from .newznab_search import NewznabSearchUseCase
from .stremio_stream import StremioStreamUseCase

__all__ = [
    "NewznabSearchUseCase",
    "StremioStreamUseCase",
]
