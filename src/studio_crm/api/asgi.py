"""ASGI entrypoint for the studio CRM API."""

from studio_crm.api.app import create_app
from studio_crm.containers import build_container

app = create_app(build_container())
