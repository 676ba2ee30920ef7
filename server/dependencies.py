"""
Request-scoped access to the services built at startup.
"""
from fastapi import Request

from bootstrap import Services


def get_services(request: Request) -> Services:
    """Services attached to the application by create_app"""
    return request.app.state.services
