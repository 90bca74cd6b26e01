# jewelry_admin/filters/form_validator.py

"""Form validation: reject bad input before any write reaches Cosmic."""

import logging
import math
import re

from jewelry_admin.errors import ValidationError
from jewelry_admin.models.catalog import ObjectKind
from jewelry_admin.models.forms import CollectionForm, ProductForm
from jewelry_admin.models.options import Currency, Material

logger = logging.getLogger("jewelry_admin.filters")

# Plain decimal or exponent notation; no digit separators, hex or words
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\Z", re.ASCII)


class FormValidator:
    """Per-entity validation rules run before create/update."""

    @staticmethod
    def parse_price(text: str | float | int) -> float:
        """Coerce price text to a finite number greater than zero."""
        candidate = str(text).strip()
        if not _DECIMAL_RE.match(candidate):
            logger.debug("Rejected price text %r", candidate)
            raise ValidationError("price", "Please enter a valid price")
        price = float(candidate)
        if not math.isfinite(price) or price <= 0:
            raise ValidationError(
                "price", "Please enter a valid price"
            )
        return price

    @staticmethod
    def validate_product(form: ProductForm) -> None:
        """Raise ValidationError on the first invalid product field."""
        if not form.title.strip():
            raise ValidationError("title", "Product title is required")
        if not form.name.strip():
            raise ValidationError("name", "Product name is required")
        FormValidator.parse_price(form.price)
        if Currency.from_key(form.currency) is None:
            raise ValidationError(
                "currency",
                f"Unsupported currency: {form.currency!r}",
            )
        if form.material.strip() and Material.from_key(form.material) is None:
            raise ValidationError(
                "material",
                f"Unknown material: {form.material!r}",
            )

    @staticmethod
    def validate_collection(form: CollectionForm) -> None:
        """Raise ValidationError on the first invalid collection field."""
        if not form.title.strip():
            raise ValidationError("title", "Collection title is required")
        if not form.name.strip():
            raise ValidationError("name", "Collection name is required")

    @staticmethod
    def validate(
        kind: ObjectKind,
        form: ProductForm | CollectionForm,
    ) -> None:
        """Dispatch to the validator for *kind*.

        Reviews are read/delete-only, so there is nothing to validate
        them against and any attempt is rejected.
        """
        try:
            if kind is ObjectKind.PRODUCTS and isinstance(form, ProductForm):
                FormValidator.validate_product(form)
            elif (
                kind is ObjectKind.COLLECTIONS
                and isinstance(form, CollectionForm)
            ):
                FormValidator.validate_collection(form)
            else:
                raise ValidationError(
                    "kind",
                    f"{kind.value} cannot be created or edited here",
                )
        except ValidationError as exc:
            logger.info(
                "Rejected %s form (field=%s): %s",
                kind.value,
                exc.field,
                exc.message,
            )
            raise
