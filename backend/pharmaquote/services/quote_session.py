"""Quote form session.

Owns the quote being composed: header fields, the item collection and the
company settings shown on the printed quote. The only asynchronous step is the
one-off settings fetch that seeds terms and bank details; the session is usable
before it resolves, and a result arriving after ``close()`` is discarded.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..models.item import Item
from ..models.quote import (
    Charges,
    CompanySettings,
    HEADER_FIELD_ALIASES,
    HEADER_NUMERIC_FIELDS,
    HEADER_TEXT_FIELDS,
    QuoteForm,
)
from ..models.validation import ValidationResult
from .item_collection import ItemCollection, ItemCollectionConfig
from .item_resolver import ItemResolver, get_item_resolver
from .numeric_input import to_number
from .quote_validator import QuoteFormValidator, get_quote_validator
from .render_context import RenderContext, TotalsAggregator, build_render_context
from .settings_source import SettingsSource


logger = logging.getLogger(__name__)


class QuoteFormSession:
    """One quote being edited."""

    def __init__(
        self,
        form: Optional[QuoteForm] = None,
        collection_config: Optional[ItemCollectionConfig] = None,
        resolver: Optional[ItemResolver] = None,
        validator: Optional[QuoteFormValidator] = None,
    ):
        """
        Initialize QuoteFormSession.

        Args:
            form: Starting form (process defaults when omitted)
            collection_config: Item collection options
            resolver: Item dependency resolver
            validator: Quote form validator
        """
        self.id = str(uuid.uuid4())
        self.created_at = datetime.now()
        self.form = form or QuoteForm()
        self.company_settings = CompanySettings()
        self.settings_loaded = False
        self.validator = validator or get_quote_validator()
        self._closed = False

        resolver = resolver or get_item_resolver()
        self.items = ItemCollection(
            initial_items=[resolver.normalize_item(item) for item in self.form.items],
            config=collection_config,
            on_items_change=self._sync_items,
            resolver=resolver,
        )
        self.form.items = self.items.items

    def _sync_items(self, items: List[Item]) -> None:
        self.form.items = items

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Tear the session down; pending settings results are discarded."""
        self._closed = True
        logger.info(f"Quote session closed: {self.id}")

    # ===== Header =====

    def set_field(self, field: str, value: Any) -> bool:
        """
        Set a header field.

        Args:
            field: Attribute name or camelCase alias
            value: New value; charges and percentages are coerced to numbers

        Returns:
            False if the form has no such header field
        """
        name = HEADER_FIELD_ALIASES.get(field, field)
        if name in HEADER_NUMERIC_FIELDS:
            setattr(self.form, name, to_number(value))
        elif name in HEADER_TEXT_FIELDS:
            setattr(self.form, name, "" if value is None else str(value))
        else:
            logger.debug(f"Ignoring unknown header field: {field}")
            return False
        return True

    def set_fields(self, values: Dict[str, Any]) -> List[str]:
        """
        Set several header fields.

        Args:
            values: Field -> value

        Returns:
            Names that were not recognised
        """
        return [field for field, value in values.items() if not self.set_field(field, value)]

    # ===== Settings =====

    def apply_settings(self, data: Dict[str, Any]) -> None:
        """
        Patch the seeded keys from organization settings.

        Only ``terms`` and ``bankDetails`` on the form are touched, and only
        when provided; edits to every other field are left alone.

        Args:
            data: Settings mapping (camelCase keys)
        """
        if data.get("terms"):
            self.form.terms = data["terms"]
        if "bankDetails" in data:
            self.form.bank_details = data["bankDetails"] or ""

        defaults = CompanySettings()
        self.company_settings = CompanySettings(
            company_phone=data.get("companyPhone") or defaults.company_phone,
            company_email=data.get("companyEmail") or defaults.company_email,
            invoice_label=data.get("invoiceLabel") or defaults.invoice_label,
            advance_payment_note=data.get("advancePaymentNote") or defaults.advance_payment_note,
        )
        self.settings_loaded = True

    async def load_settings(self, source: SettingsSource) -> bool:
        """
        Fetch organization settings and seed the form with them.

        Failures are logged and swallowed; the form keeps its built-in defaults.

        Args:
            source: Settings source

        Returns:
            True if settings were applied
        """
        try:
            data = await source.get_settings()
        except Exception as e:
            logger.warning(f"Failed to fetch settings for quote {self.id}: {e}")
            return False

        if self._closed:
            logger.warning(f"Discarding settings for closed quote session: {self.id}")
            return False

        self.apply_settings(data or {})
        logger.info(f"Settings applied to quote session: {self.id}")
        return True

    # ===== Submission =====

    def validate(self) -> ValidationResult:
        return self.validator.validate(self.form)

    def charges(self) -> Charges:
        return Charges.from_form(self.form)

    def render_context(self, aggregator: TotalsAggregator) -> RenderContext:
        """
        Build the projection the printable layouts consume.

        Args:
            aggregator: Totals aggregator

        Returns:
            RenderContext
        """
        items = self.items.items
        totals = aggregator.aggregate(items, self.charges())
        return build_render_context(items, self.company_settings, totals)

    def snapshot(self) -> Dict[str, Any]:
        """Serializable view of the session."""
        return {
            "id": self.id,
            "createdAt": self.created_at.isoformat(),
            "settingsLoaded": self.settings_loaded,
            "canRemoveItems": self.items.can_remove(),
            "form": self.form.model_dump(by_alias=True),
            "companySettings": self.company_settings.model_dump(by_alias=True),
        }
