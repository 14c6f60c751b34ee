"""Address service"""

from typing import Iterable

from cardledger.errors.address import AddressNotFound
from cardledger.models.address import Address
from cardledger.services.base import BaseService


class AddressService(BaseService[Address]):
    model = Address
    not_found_error = AddressNotFound

    def get_by_ids(self, address_ids: Iterable[int]) -> dict[int, Address]:
        ids = set(address_ids)
        if not ids:
            return {}
        addresses = self.db.query(self.model).filter(self.model.id.in_(ids)).all()
        return {address.id: address for address in addresses}

    def ensure_exist(self, address_ids: Iterable[int]) -> None:
        ids = list(dict.fromkeys(address_ids))
        found = self.get_by_ids(ids)
        for address_id in ids:
            if address_id not in found:
                raise AddressNotFound(f"Address id={address_id}")
