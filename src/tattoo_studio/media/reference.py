from __future__ import annotations

import base64
import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


_DATA_URI_RE = re.compile(
    r"data:(?P<mime>[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]*/[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]*)"
    r";base64,(?P<payload>[A-Za-z0-9+/]+={0,2})"
)


@dataclass(frozen=True)
class MediaReference:
    """
    A MIME-typed, base64-encoded binary payload.

    Serialized form: data:<mime_type>;base64,<payload>
    """
    mime_type: str
    payload: str

    @classmethod
    def parse(cls, text: str) -> "MediaReference":
        """
        Parse a data URI. Only the textual shape is checked; the payload is
        not decoded here.
        """
        if not isinstance(text, str) or not text:
            raise ValueError("Media reference must be a non-empty string.")

        m = _DATA_URI_RE.fullmatch(text)
        if not m:
            raise ValueError(
                "Media reference must be a data URI of the form "
                "'data:<mimetype>;base64,<encoded_data>'."
            )
        if len(m.group("payload")) % 4:
            raise ValueError("Media reference payload length must be a multiple of 4.")
        return cls(mime_type=m.group("mime"), payload=m.group("payload"))

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str) -> "MediaReference":
        b64 = base64.b64encode(data).decode("ascii")
        return cls.parse(f"data:{mime_type};base64,{b64}")

    @classmethod
    def from_path(cls, path: str, mime_type: Optional[str] = None) -> "MediaReference":
        """
        Read a local image file into a media reference.
        The MIME type is guessed from the file extension when not given.
        """
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Image not found: {path}")

        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(p.name)
        if not mime_type:
            raise ValueError(f"Cannot determine MIME type for {path}; pass mime_type explicitly.")

        with p.open("rb") as f:
            return cls.from_bytes(f.read(), mime_type)

    @property
    def data(self) -> bytes:
        return base64.b64decode(self.payload, validate=True)

    @property
    def uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.payload}"

    def __str__(self) -> str:
        return self.uri


def is_media_reference(text: object) -> bool:
    try:
        MediaReference.parse(text)  # type: ignore[arg-type]
    except ValueError:
        return False
    return True
