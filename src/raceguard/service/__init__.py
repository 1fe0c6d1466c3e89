"""HTTP service — multipart upload in, JSON Report out."""

from raceguard.service.app import create_app

__all__ = ["create_app"]
