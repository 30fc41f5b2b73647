"""Link registration: validate a target URL and allocate a short code for it."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .errors import ValidationError, InvalidTargetError, CodeAllocationError
from .shortcode import ShortCodeGenerator
from .store.base import MappingStore
from .store.models import ShortLinkRecord, InvalidRecordError
from .common.validators import is_valid_target_url
from .common.url_builder import build_short_url


@dataclass(frozen=True)
class RegisteredLink:
    """Result of a successful registration."""

    code: str
    short_url: str
    record: ShortLinkRecord


class LinkRegistrar:
    """Creates code -> target URL mappings."""

    def __init__(
        self,
        store: MappingStore,
        generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_attempts: int = 20,
        fail_on_exhaustion: bool = False,
    ):
        """Initialize registrar.

        Args:
            store: Mapping store
            generator: Optional short code generator
            logger: Optional logger
            max_attempts: Maximum number of candidate codes tried per registration
            fail_on_exhaustion: Raise instead of reusing the last candidate
                when every attempt collides
        """
        self.store = store
        self.generator = generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_attempts = max(1, max_attempts)
        self.fail_on_exhaustion = fail_on_exhaustion

    async def register(self, raw_url: Optional[str], base_url: str) -> RegisteredLink:
        """Register a target URL and return its public short URL.

        Args:
            raw_url: The target URL as submitted
            base_url: Public base URL of this service (scheme + host)

        Returns:
            RegisteredLink with code, short URL and stored record

        Raises:
            ValidationError: If the URL is missing or not http(s)
            CodeAllocationError: If fail_on_exhaustion is set and no free
                code was found
        """
        is_valid, error = is_valid_target_url(raw_url)
        if not is_valid:
            raise ValidationError(error)

        code = await self._allocate_code()

        # Plain set: a concurrent registration that drew the same code
        # between our check and this write is overwritten (last writer wins).
        record = ShortLinkRecord(
            code=code,
            target_url=raw_url,
            created_at=datetime.now(timezone.utc),
        )
        await self.store.set(record)

        self.logger.info(f"Created short link: {code} -> {raw_url}")

        return RegisteredLink(
            code=code,
            short_url=build_short_url(code, base_url),
            record=record,
        )

    async def resolve(self, code: str) -> Optional[ShortLinkRecord]:
        """Fresh read of the record for a code.

        Args:
            code: The short code to lookup

        Returns:
            The record or None

        Raises:
            InvalidTargetError: If the stored value fails schema checks
        """
        try:
            return await self.store.get(code)
        except InvalidRecordError:
            raise InvalidTargetError()

    async def _allocate_code(self) -> str:
        """Pick a code not currently in the store.

        Returns:
            A free code, or the last candidate when every attempt collided
            (unless fail_on_exhaustion is set)
        """
        code = ""
        for attempt in range(self.max_attempts):
            code = self.generator.generate()
            if not await self.store.exists(code):
                if attempt:
                    self.logger.debug(f"Generated code after {attempt + 1} attempts: {code}")
                return code
            self.logger.debug(f"Code collision on attempt {attempt + 1}: {code}")

        if self.fail_on_exhaustion:
            raise CodeAllocationError()

        self.logger.warning(
            f"No free code after {self.max_attempts} attempts, reusing last candidate {code}"
        )
        return code
