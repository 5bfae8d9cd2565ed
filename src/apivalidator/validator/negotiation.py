"""Content-type negotiation for request and response bodies."""

import logging
from collections.abc import Mapping

from .decoder import FORM_URLENCODED, JSON, Decoder
from .errors import NegotiationError
from .models import ByContentType, Forced

logger = logging.getLogger(__name__)

DEFAULT_ENCODING_TABLE: Mapping[str, str] = {
    "application/json": JSON,
    "application/x-www-form-urlencoded": FORM_URLENCODED,
}


def strip_parameters(content_type: str | None) -> str:
    """Drop media type parameters, e.g. ``; charset=utf-8``."""
    return (content_type or "").split(";", 1)[0].strip()


class ContentTypeResolver:
    """Picks the decode method for a body.

    A route either negotiates by content-type (`ByContentType`) or pins a
    single method (`Forced`). Without an encoding spec the resolver falls
    back to its default table.

    Example:
        >>> resolver = ContentTypeResolver()
        >>> resolver.resolve("application/json; charset=utf-8")
        'json'
        >>> resolver.resolve("text/plain", Forced(method="identity"))
        'identity'
    """

    def __init__(
        self,
        decoder: Decoder | None = None,
        default_table: Mapping[str, str] | None = None,
    ):
        """Initialize the resolver.

        Args:
            decoder: Decoder whose capabilities bound the negotiated method
            default_table: Content-type table used when a route declares none
        """
        self.decoder = decoder or Decoder()
        self.default_table = dict(
            DEFAULT_ENCODING_TABLE if default_table is None else default_table
        )

    def resolve(
        self,
        content_type: str | None,
        encoding: ByContentType | Forced | None = None,
    ) -> str:
        """Resolve the decode method for ``content_type``.

        Args:
            content_type: Raw content-type, parameters allowed
            encoding: The route's encoding spec, if any

        Returns:
            Name of a decode method supported by the decoder

        Raises:
            NegotiationError: If the content-type is not in the table or the
                resolved method is unknown to the decoder
        """
        media_type = strip_parameters(content_type)

        if isinstance(encoding, Forced):
            method = encoding.method
        else:
            table = self.default_table if encoding is None else encoding.table
            method = table.get(media_type)
            if method is None:
                raise NegotiationError(NegotiationError.UNSUPPORTED_CONTENT_TYPE, media_type)

        if not self.decoder.supports(method):
            raise NegotiationError(NegotiationError.UNKNOWN_METHOD, media_type, method)

        logger.debug(f"Negotiated '{method}' for content-type '{media_type}'")
        return method
