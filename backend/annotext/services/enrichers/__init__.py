from annotext.services.enrichers.base import Enricher
from annotext.services.enrichers.number import Number, NumberEnricher
from annotext.services.enrichers.stop_word import STOP_WORD, StopWordEnricher, StopWordError

__all__ = [
    "Enricher",
    "Number",
    "NumberEnricher",
    "STOP_WORD",
    "StopWordEnricher",
    "StopWordError",
]
