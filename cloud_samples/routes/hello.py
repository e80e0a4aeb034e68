"""Hello-world endpoints."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from cloud_samples import __version__

router = APIRouter(tags=["hello"])


@router.get("/", response_class=PlainTextResponse)
def hello():
    return "Hello, World!"


@router.get("/version", response_class=PlainTextResponse)
def version():
    return __version__
