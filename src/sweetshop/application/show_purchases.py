"""Application service: Show Purchases use case (query).

Regular users see their own history; admins see every purchase.
"""

from __future__ import annotations

from sweetshop.application.dto import PurchaseDTO
from sweetshop.domain.exceptions import ValidationError
from sweetshop.domain.repository.purchase_repository import PurchaseRepository


class ShowPurchasesHandler:

    def __init__(self, purchase_repo: PurchaseRepository) -> None:
        self._purchase_repo = purchase_repo

    def handle(self, actor_id: str, is_admin: bool = False) -> list[PurchaseDTO]:
        if is_admin:
            records = self._purchase_repo.list_all()
        else:
            if not actor_id:
                raise ValidationError("User id is required")
            records = self._purchase_repo.list_for_user(actor_id)
        return [PurchaseDTO.from_record(record) for record in records]
