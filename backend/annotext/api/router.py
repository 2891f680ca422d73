from fastapi import APIRouter

from annotext.api.routes.dictionary import router as dictionary_router
from annotext.api.routes.root import router as root_router
from annotext.api.routes.sentences import router as sentences_router

api_router = APIRouter()
api_router.include_router(root_router)
api_router.include_router(sentences_router)
api_router.include_router(dictionary_router)
