"""Parse and render Docker image references."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass
from importlib import resources
from typing import Any

import jsonschema

logger = logging.getLogger(__name__)


class DockerImageError(ValueError):
    """Base class for errors raised by :mod:`docker_image`."""


class InvalidFormatError(DockerImageError):
    """Raised when a string is not a valid Docker image reference."""

    def __init__(self) -> None:
        super().__init__("Invalid Docker image format")


# Character classes of the individual reference components.
_SEGMENT = r"[a-z0-9]+(?:[._-][a-z0-9]+)*"
_REGISTRY = _SEGMENT + r"\.[a-z]{2,}(?::[0-9]+)?"
_TAG = r"[a-zA-Z0-9._-]+"
_DIGEST = r"[a-z0-9]+:[a-fA-F0-9]{64}"

# [registry/]name[:tag][@digest]; the registry must contain a dot and end
# in an alphabetic label of at least two characters.
_REFERENCE_RE = re.compile(
    rf"(?:(?P<registry>{_REGISTRY})/)?"
    rf"(?P<name>{_SEGMENT}(?:/{_SEGMENT})*)"
    rf"(?::(?P<tag>{_TAG}))?"
    rf"(?:@(?P<digest>{_DIGEST}))?"
)


@dataclass(frozen=True, kw_only=True)
class DockerImage:
    """Parsed Docker image reference.

    Attributes:
        name: Image name including namespaces (e.g. ``library/nginx``).
        registry: Optional registry host and port (e.g. ``ghcr.io`` or
            ``my-registry.local:5000``).
        tag: Optional tag (e.g. ``latest``).
        digest: Optional content digest (e.g. ``sha256:<64 hex chars>``).

    Fields are keyword-only. No defaults are filled in: ``nginx`` parses to
    a reference without a registry or tag.
    """

    name: str
    registry: str | None = None
    tag: str | None = None
    digest: str | None = None

    def __str__(self) -> str:
        return render(self)

    @classmethod
    def parse(cls, text: str) -> DockerImage:
        """Parse *text* into an instance of *cls*. See :func:`parse`."""
        if not isinstance(text, str):
            logger.debug("Rejected non-string reference of type %s", type(text).__name__)
            raise InvalidFormatError()

        match = _REFERENCE_RE.fullmatch(text)
        if not match:
            logger.debug("Rejected invalid reference %r", text)
            raise InvalidFormatError()

        return cls(
            name=match.group("name"),
            registry=match.group("registry"),
            tag=match.group("tag"),
            digest=match.group("digest"),
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, str | None]:
        """Return the four fields as a plain dict (absent fields are ``None``)."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DockerImage:
        """Build a reference from a dict produced by :meth:`to_dict`.

        The payload is validated against ``reference.schema.json`` and the
        rendered reference is parsed again, so every field obeys the grammar.

        Raises:
            InvalidFormatError: If the payload is malformed.
        """
        try:
            jsonschema.validate(instance=data, schema=_load_schema())
        except jsonschema.ValidationError as exc:
            logger.debug("Reference payload failed schema validation: %s", exc.message)
            raise InvalidFormatError() from exc

        image = cls(
            name=data["name"],
            registry=data.get("registry"),
            tag=data.get("tag"),
            digest=data.get("digest"),
        )
        # A registry-less name whose first segment looks like a host would
        # come back as a registry, so compare structurally.
        if cls.parse(render(image)) != image:
            logger.debug("Reference payload does not round-trip: %r", data)
            raise InvalidFormatError()
        return image


def parse(text: str) -> DockerImage:
    """Parse a Docker image reference into a :class:`DockerImage`.

    Supported formats:

    * ``nginx``
    * ``nginx:latest``
    * ``docker.io/library/nginx``
    * ``docker.io/library/nginx:latest@sha256:<digest>``
    * ``my-registry.local:5000/library/image-name@sha256:<digest>``

    The first path segment is only treated as a registry when it contains
    a dot and ends in an alphabetic label (``localhost/x`` has no registry).

    Args:
        text: The reference string.

    Returns:
        The parsed reference.

    Raises:
        InvalidFormatError: If *text* is not a valid reference.
    """
    return DockerImage.parse(text)


def render(image: DockerImage) -> str:
    """Render *image* as ``[registry/]name[:tag][@digest]``."""
    text = image.name
    if image.registry is not None:
        text = f"{image.registry}/{text}"
    if image.tag is not None:
        text += f":{image.tag}"
    if image.digest is not None:
        text += f"@{image.digest}"
    return text


def is_valid(text: str) -> bool:
    """Return whether *text* is a valid Docker image reference."""
    try:
        parse(text)
    except InvalidFormatError:
        return False
    return True


def _load_schema() -> dict[str, Any]:
    """Load the reference JSON Schema from the ``docker_image.schemas`` package."""
    schema_ref = resources.files("docker_image.schemas").joinpath(
        "reference.schema.json"
    )
    return json.loads(schema_ref.read_text(encoding="utf-8"))  # type: ignore[no-any-return]
