"""Tests for toggling address links"""

import pytest
from cardledger.errors.card import AddressAlreadyLinked
from cardledger.services.linkage import toggle_streets


def nowhere(address_id: int) -> bool:
    return False


class TestToggleStreets:
    def test_new_unclaimed_id_is_added(self):
        assert toggle_streets([1], [2], nowhere) == [1, 2]

    def test_present_id_is_removed(self):
        assert toggle_streets([1, 2], [1], nowhere) == [2]

    def test_removing_last_id_leaves_empty_set(self):
        assert toggle_streets([1], [1], nowhere) == []

    def test_id_claimed_by_another_card_is_rejected(self):
        with pytest.raises(AddressAlreadyLinked) as exc_info:
            toggle_streets([1], [2, 3], lambda address_id: address_id == 3)
        assert "address id=3" in exc_info.value.error

    def test_toggle_twice_in_one_batch_cancels_out(self):
        assert toggle_streets([1], [2, 2], nowhere) == [1]

    def test_present_id_is_removed_even_if_claim_check_would_fail(self):
        # the claim check only applies to ids being added
        assert toggle_streets([1, 2], [2], lambda address_id: True) == [1]

    def test_result_is_deduplicated(self):
        assert toggle_streets([1, 1, 2], [], nowhere) == [1, 2]
