"""
Category service: categories, subcategories and the rules
that keep movements pointing at something that exists.

A movement's category reference may name a subcategory or a
category directly. resolve_category turns either into the
category it belongs to.
"""

import logging

from finance_tracker.config import get_settings
from finance_tracker.exceptions import (
    InvalidRequestError,
    NotFoundError,
    ReferentialIntegrityError,
)
from finance_tracker.models.category import Category, Subcategory
from finance_tracker.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    SubcategoryCreate,
    SubcategoryUpdate,
)
from finance_tracker.store.base import RecordStore

logger = logging.getLogger(__name__)


class CategoryService:

    def __init__(self, store: RecordStore, transfer_category_name: str | None = None):
        self.store = store
        self.transfer_category_name = (
            transfer_category_name or get_settings().TRANSFER_CATEGORY_NAME
        )

    # --- Categories ---

    def _refuse_reserved_name(self, name: str) -> None:
        if name == self.transfer_category_name:
            logger.warning("Refused to use reserved category name %r", name)
            raise InvalidRequestError(
                f"Category name '{name}' is reserved for transfers"
            )

    def create_category(self, request: CategoryCreate) -> Category:
        self._refuse_reserved_name(request.name)
        category = self.store.categories.create(name=request.name)
        logger.info("Created category %s (%s)", category.id, category.name)
        return category

    def get_category(self, category_id: str) -> Category:
        category = self.store.categories.get_by_id(category_id)
        if not category:
            raise NotFoundError(f"Category {category_id} not found")
        return category

    def list_categories(self, include_reserved: bool = True) -> list[Category]:
        """
        Return all categories.

        With include_reserved=False the transfers category is left
        out, which is the list offered for manual selection.
        """
        categories = self.store.categories.list_all()
        if include_reserved:
            return categories
        return [c for c in categories if not self.is_reserved(c)]

    def update_category(self, category_id: str, request: CategoryUpdate) -> Category:
        category = self.get_category(category_id)
        if self.is_reserved(category):
            raise InvalidRequestError(
                f"Category '{category.name}' is reserved for transfers "
                f"and cannot be renamed"
            )
        self._refuse_reserved_name(request.name)
        category.name = request.name
        return self.store.categories.update(category)

    def delete_category(self, category_id: str) -> None:
        """
        Delete a category together with its subcategories.

        Nothing is deleted if any movement references the
        category or one of its subcategories.
        """
        category = self.get_category(category_id)
        subcategories = self.store.subcategories.list_by(category_id=category.id)

        references = {category.id} | {s.id for s in subcategories}
        used = [
            m for m in self.store.movements.list_all()
            if m.subcategory_id in references
        ]
        if used:
            logger.warning(
                "Refused to delete category %s: %d movement(s) reference it",
                category.id, len(used),
            )
            raise ReferentialIntegrityError(
                f"Category '{category.name}' or its subcategories are used by "
                f"{len(used)} movement(s); reassign or delete them first"
            )

        for subcategory in subcategories:
            self.store.subcategories.delete_by_id(subcategory.id)
        self.store.categories.delete_by_id(category.id)
        logger.info(
            "Deleted category %s and %d subcategories",
            category.id, len(subcategories),
        )

    # --- Subcategories ---

    def create_subcategory(self, request: SubcategoryCreate) -> Subcategory:
        parent = self.get_category(request.category_id)
        subcategory = self.store.subcategories.create(
            name=request.name,
            category_id=parent.id,
        )
        logger.info(
            "Created subcategory %s (%s) under %s",
            subcategory.id, subcategory.name, parent.id,
        )
        return subcategory

    def get_subcategory(self, subcategory_id: str) -> Subcategory:
        subcategory = self.store.subcategories.get_by_id(subcategory_id)
        if not subcategory:
            raise NotFoundError(f"Subcategory {subcategory_id} not found")
        return subcategory

    def list_subcategories(self, category_id: str | None = None) -> list[Subcategory]:
        if category_id is None:
            return self.store.subcategories.list_all()
        return self.store.subcategories.list_by(category_id=category_id)

    def update_subcategory(
        self, subcategory_id: str, request: SubcategoryUpdate
    ) -> Subcategory:
        subcategory = self.get_subcategory(subcategory_id)
        if request.name is not None:
            subcategory.name = request.name
        if request.category_id is not None:
            subcategory.category_id = self.get_category(request.category_id).id
        return self.store.subcategories.update(subcategory)

    def delete_subcategory(self, subcategory_id: str) -> None:
        subcategory = self.get_subcategory(subcategory_id)
        used = self.store.movements.list_by(subcategory_id=subcategory.id)
        if used:
            logger.warning(
                "Refused to delete subcategory %s: %d movement(s) reference it",
                subcategory.id, len(used),
            )
            raise ReferentialIntegrityError(
                f"Subcategory '{subcategory.name}' is used by {len(used)} "
                f"movement(s); reassign or delete them first"
            )
        self.store.subcategories.delete_by_id(subcategory.id)
        logger.info("Deleted subcategory %s", subcategory.id)

    # --- Reference resolution ---

    def is_reserved(self, category: Category) -> bool:
        return category.name == self.transfer_category_name

    def get_transfer_category(self) -> Category | None:
        matches = self.store.categories.list_by(name=self.transfer_category_name)
        return matches[0] if matches else None

    def ensure_transfer_category(self) -> Category:
        """Return the reserved transfers category, creating it if missing."""
        category = self.get_transfer_category()
        if category is None:
            category = self.store.categories.create(name=self.transfer_category_name)
            logger.info("Created reserved category %s (%s)", category.id, category.name)
        return category

    def lookup_category(
        self, reference: str
    ) -> tuple[Category, Subcategory | None] | None:
        """Resolve a reference, returning None when it points nowhere."""
        subcategory = self.store.subcategories.get_by_id(reference)
        if subcategory is not None:
            category = self.store.categories.get_by_id(subcategory.category_id)
            if category is None:
                return None
            return category, subcategory

        category = self.store.categories.get_by_id(reference)
        if category is not None:
            return category, None
        return None

    def resolve_category(self, reference: str) -> tuple[Category, Subcategory | None]:
        """
        Resolve a movement's category reference.

        Returns the owning category and, when the reference named
        a subcategory, that subcategory.
        """
        resolved = self.lookup_category(reference)
        if resolved is None:
            raise NotFoundError(f"Category or subcategory {reference} not found")
        return resolved

    def validate_selectable(self, reference: str) -> tuple[Category, Subcategory | None]:
        """Resolve a reference chosen by a user for a manual movement."""
        category, subcategory = self.resolve_category(reference)
        if self.is_reserved(category):
            raise InvalidRequestError(
                f"Category '{category.name}' is reserved for transfers"
            )
        return category, subcategory
