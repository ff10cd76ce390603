from fastapi import Request

from storefront.infrastructure.bootstrap import Container


def get_container(request: Request) -> Container:
    return request.app.state.container
