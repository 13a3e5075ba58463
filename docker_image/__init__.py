"""Parse and render Docker image references like ``registry/name:tag@digest``."""

from docker_image.reference import (
    DockerImage,
    DockerImageError,
    InvalidFormatError,
    is_valid,
    parse,
    render,
)

__all__ = [
    "DockerImage",
    "DockerImageError",
    "InvalidFormatError",
    "is_valid",
    "parse",
    "render",
]
