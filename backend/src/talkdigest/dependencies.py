"""FastAPI dependencies.

The service container is built once in the application lifespan and kept on
app.state; endpoints receive it through `get_service`.
"""

from typing import Annotated

from fastapi import Depends, Request

from .container import TalkDigestService


def get_service(request: Request) -> TalkDigestService:
    """Return the application's service container."""
    return request.app.state.service


Service = Annotated[TalkDigestService, Depends(get_service)]
