from annotext.services.use_cases.sentences import SentenceUseCase

__all__ = ["SentenceUseCase"]
