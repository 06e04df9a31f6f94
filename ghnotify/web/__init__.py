# Web - HTTP surface for the validation probes
from .server import create_probe_app, start_probe_server

__all__ = ["create_probe_app", "start_probe_server"]
