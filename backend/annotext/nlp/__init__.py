from annotext.nlp.adapter import IdentityStemmer, Stemmer
from annotext.nlp.meta import Meta, MetaKindMismatchError
from annotext.nlp.sentence import Sentence, Span, Token
from annotext.nlp.snowball import SnowballStemmerAdapter, load_snowball_stemmer
from annotext.nlp.tokenizer import Tokenizer

__all__ = [
    "IdentityStemmer",
    "Meta",
    "MetaKindMismatchError",
    "Sentence",
    "SnowballStemmerAdapter",
    "Span",
    "Stemmer",
    "Token",
    "Tokenizer",
    "load_snowball_stemmer",
]
