"""Unit tests for pre-settlement validation."""

import pytest

from src.bl_common.enums import AccountRole
from src.bl_common.errors import MalformedTicketError
from src.bl_settlement.domain.rules import (
    MAX_TICKETS_PER_PURCHASE,
    check_buyer_name,
    validate_cart,
    validate_ticket_numbers,
)

VALID = [1, 1, 1, 1, 2, 3, 4, 5, 6, 25]


class TestValidateTicketNumbers:
    def test_valid_ticket_passes(self) -> None:
        validate_ticket_numbers(VALID)

    @pytest.mark.parametrize("numbers", [[1] * 9, [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11]])
    def test_wrong_length(self, numbers: list[int]) -> None:
        with pytest.raises(MalformedTicketError) as exc_info:
            validate_ticket_numbers(numbers)
        assert exc_info.value.code == 4001

    @pytest.mark.parametrize("bad", [0, 26, -3])
    def test_out_of_range(self, bad: int) -> None:
        with pytest.raises(MalformedTicketError, match="between"):
            validate_ticket_numbers([bad, 2, 3, 4, 5, 6, 7, 8, 9, 10])

    def test_fifth_repeat_rejected(self) -> None:
        with pytest.raises(MalformedTicketError, match="at most 4"):
            validate_ticket_numbers([7, 7, 7, 7, 7, 1, 2, 3, 4, 5])


class TestValidateCart:
    def test_empty_cart(self) -> None:
        with pytest.raises(MalformedTicketError):
            validate_cart([])

    def test_oversized_cart(self) -> None:
        with pytest.raises(MalformedTicketError):
            validate_cart([VALID] * (MAX_TICKETS_PER_PURCHASE + 1))

    def test_one_bad_set_rejects_whole_cart(self) -> None:
        with pytest.raises(MalformedTicketError):
            validate_cart([VALID, [1, 2, 3]])


class TestCheckBuyerName:
    def test_client_needs_no_name(self) -> None:
        check_buyer_name(AccountRole.CLIENT, None)

    @pytest.mark.parametrize("role", [AccountRole.SELLER, AccountRole.ADMIN])
    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_seller_sale_needs_name(self, role: AccountRole, name: str | None) -> None:
        with pytest.raises(MalformedTicketError, match="buyer name"):
            check_buyer_name(role, name)

    def test_seller_with_name_passes(self) -> None:
        check_buyer_name(AccountRole.SELLER, "Ana Souza")
