"""Tests for the card lifecycle through the GraphQL API"""

import pytest
from cardledger.models.card import Card
from conftest import CardsClient


class TestCardCustodyCycle:
    """One card through creation, linkage, checkout, return and removal"""

    @pytest.fixture(scope="class")
    def ctx(self, make_user, make_address, token_factory):
        secretary = make_user("Cycle Secretary", group="north", is_scards=True)
        holder = make_user("Cycle Holder", group="north")
        address = make_address("Rua Augusta", number="12", city="Lisbon")
        return {
            "token": token_factory(secretary),
            "holder": holder,
            "address": address,
        }

    def test_create(self, cards_api: CardsClient, ctx):
        created = cards_api.create(ctx["token"], comment="front door")
        assert created["success"] is True
        assert created["message"] == "Card created."
        card = created["card"]
        assert card["number"] == 1
        assert card["group"] == "north"
        assert card["comment"] == "front door"
        assert card["street"] == []
        assert card["usersAssigned"] == []
        assert card["startDate"] is None
        assert card["endDate"] is None
        ctx["card_id"] = card["id"]

    def test_link_address(self, cards_api: CardsClient, ctx):
        updated = cards_api.update(ctx["token"], ctx["card_id"], [ctx["address"].id])
        assert updated["success"] is True
        assert updated["message"] == "Card updated."
        assert updated["card"]["street"] == [
            {
                "id": str(ctx["address"].id),
                "street": "Rua Augusta",
                "number": "12",
                "neighborhood": None,
                "city": "Lisbon",
            }
        ]

    def test_assign(self, cards_api: CardsClient, ctx):
        assigned = cards_api.assign(ctx["token"], ctx["holder"].id, [ctx["card_id"]])
        assert assigned["success"] is True, assigned
        assert assigned["message"] == "Cards assigned to user Cycle Holder."
        [card] = assigned["card"]
        assert card["startDate"] is not None
        assert card["endDate"] is None
        assert [entry["userId"] for entry in card["usersAssigned"]] == [
            str(ctx["holder"].id)
        ]

    def test_return(self, cards_api: CardsClient, ctx):
        returned = cards_api.return_card(ctx["token"], ctx["holder"].id, ctx["card_id"])
        assert returned["success"] is True, returned
        assert returned["message"] == "Card returned."
        card = returned["card"]
        assert card["startDate"] is None
        assert card["endDate"] is not None
        assert card["usersAssigned"] == []

    def test_assign_again_clears_end_date(self, cards_api: CardsClient, ctx):
        assigned = cards_api.assign(ctx["token"], ctx["holder"].id, [ctx["card_id"]])
        [card] = assigned["card"]
        assert card["endDate"] is None
        assert len(card["usersAssigned"]) == 1
        returned = cards_api.return_card(ctx["token"], ctx["holder"].id, ctx["card_id"])
        assert returned["success"] is True

    def test_unlinking_last_address_deletes_card(self, cards_api: CardsClient, ctx):
        updated = cards_api.update(ctx["token"], ctx["card_id"], [ctx["address"].id])
        assert updated["success"] is True
        assert updated["message"] == "Card deleted because it has no linked addresses."
        assert updated["card"] is None
        assert cards_api.card(ctx["token"], ctx["card_id"]) is None

    def test_number_is_free_again(self, cards_api: CardsClient, ctx):
        created = cards_api.create(ctx["token"])
        assert created["card"]["number"] == 1


class TestCardLinkage:
    @pytest.fixture(scope="class")
    def ctx(self, cards_api: CardsClient, make_user, make_address, token_factory):
        token = token_factory(make_user("Linkage User"))
        addresses = [make_address(f"Street {i}") for i in range(4)]
        first = cards_api.create(token)["card"]["id"]
        second = cards_api.create(token)["card"]["id"]
        cards_api.update(token, first, [addresses[0].id, addresses[1].id])
        return {"token": token, "addresses": addresses, "first": first, "second": second}

    def street_ids(self, cards_api, ctx, card_id):
        return [int(s["id"]) for s in cards_api.card(ctx["token"], card_id)["street"]]

    def test_toggle_keeps_order(self, cards_api: CardsClient, ctx):
        a = ctx["addresses"]
        assert self.street_ids(cards_api, ctx, ctx["first"]) == [a[0].id, a[1].id]

    def test_address_of_another_card_is_rejected(self, cards_api: CardsClient, ctx):
        a = ctx["addresses"]
        cards_api.update(ctx["token"], ctx["second"], [a[2].id])
        before = cards_api.cards(ctx["token"])

        updated = cards_api.update(ctx["token"], ctx["second"], [a[3].id, a[0].id])
        assert updated["success"] is False
        assert updated["message"] == (
            "Error updating card: Address is already linked to another card: "
            f"address id={a[0].id}"
        )
        assert updated["card"] is None
        # the rejected update changed nothing, not even the valid part of it
        assert cards_api.cards(ctx["token"]) == before

    def test_address_sets_do_not_intersect(self, cards_api: CardsClient, ctx):
        seen = set()
        for card in cards_api.cards(ctx["token"]):
            ids = {s["id"] for s in card["street"]}
            assert not ids & seen
            seen |= ids

    def test_unknown_address(self, cards_api: CardsClient, ctx):
        updated = cards_api.update(ctx["token"], ctx["second"], [999])
        assert updated["success"] is False
        assert updated["message"] == "Error updating card: Address not found: Address id=999"

    def test_first_offending_address_decides_error(self, cards_api: CardsClient, ctx):
        linked_elsewhere = ctx["addresses"][0].id
        updated = cards_api.update(ctx["token"], ctx["second"], [linked_elsewhere, 999])
        assert updated["message"] == (
            "Error updating card: Address is already linked to another card: "
            f"address id={linked_elsewhere}"
        )
        updated = cards_api.update(ctx["token"], ctx["second"], [999, linked_elsewhere])
        assert updated["message"] == "Error updating card: Address not found: Address id=999"

    def test_invalid_address_id(self, cards_api: CardsClient, ctx):
        updated = cards_api.update(ctx["token"], ctx["second"], ["abc"])
        assert updated["success"] is False
        assert updated["message"] == "Error updating card: Invalid id: abc"

    def test_invalid_card_id(self, cards_api: CardsClient, ctx):
        updated = cards_api.update(ctx["token"], "abc", [ctx["addresses"][3].id])
        assert updated["message"] == "Error updating card: Invalid id: abc"

    def test_unknown_card(self, cards_api: CardsClient, ctx):
        updated = cards_api.update(ctx["token"], 999, [ctx["addresses"][3].id])
        assert updated["success"] is False
        assert updated["message"] == "Error updating card: Card not found: Card id=999"

    def test_same_id_twice_is_a_no_op(self, cards_api: CardsClient, ctx):
        a = ctx["addresses"]
        updated = cards_api.update(ctx["token"], ctx["first"], [a[3].id, a[3].id])
        assert updated["success"] is True
        assert self.street_ids(cards_api, ctx, ctx["first"]) == [a[0].id, a[1].id]


class TestCardDelete:
    @pytest.fixture(scope="class")
    def token(self, make_user, token_factory):
        return token_factory(make_user("Delete User"))

    def test_delete(self, cards_api: CardsClient, token, db_conn):
        card_id = cards_api.create(token)["card"]["id"]
        deleted = cards_api.delete(token, card_id)
        assert deleted == {"message": "Card deleted.", "success": True}
        assert cards_api.card(token, card_id) is None
        with db_conn.get_session() as session:
            assert session.get(Card, int(card_id)) is None

    def test_delete_is_idempotent(self, cards_api: CardsClient, token):
        card_id = cards_api.create(token)["card"]["id"]
        assert cards_api.delete(token, card_id)["success"] is True
        assert cards_api.delete(token, card_id)["success"] is True

    def test_delete_invalid_id(self, cards_api: CardsClient, token):
        deleted = cards_api.delete(token, "-3")
        assert deleted == {"message": "Error deleting card: Invalid id: -3", "success": False}

    def test_delete_frees_address(self, cards_api: CardsClient, token, make_address):
        address = make_address("Freed Street")
        first = cards_api.create(token)["card"]["id"]
        cards_api.update(token, first, [address.id])
        cards_api.delete(token, first)

        second = cards_api.create(token)["card"]["id"]
        updated = cards_api.update(token, second, [address.id])
        assert updated["success"] is True
        assert [s["street"] for s in updated["card"]["street"]] == ["Freed Street"]
