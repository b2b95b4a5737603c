"""
Capacity ledger tests: admission, compensation and oversell-freedom
under concurrent reservations.
"""
import pytest
import threading
import uuid
from concurrent.futures import ThreadPoolExecutor
from eventdesk.core.exceptions import CapacityExceeded, InvalidRequest, TicketTypeNotFound
from eventdesk.models.ticket_type import TicketTypeStatus
from eventdesk.services.capacity_ledger import CapacityLedger, Reservation


# =============================================================================
# TEST: reserve
# =============================================================================
class TestReserve:
    """Test single reservations."""

    def test_reserve_increments_sold(self, db, sample_ticket_type):
        """A reservation within capacity increments quantity_sold."""
        ledger = CapacityLedger(db)

        reservation = ledger.reserve(sample_ticket_type.id, 4)

        assert reservation == Reservation(ticket_type_id=sample_ticket_type.id, quantity=4)
        db.refresh(sample_ticket_type)
        assert sample_ticket_type.quantity_sold == 4

    def test_reserve_exact_remaining_marks_sold_out(self, db, ticket_type_factory):
        """Taking the last seats flips the type to sold_out."""
        ticket_type = ticket_type_factory(quantity_total=10, quantity_sold=7)

        CapacityLedger(db).reserve(ticket_type.id, 3)

        db.refresh(ticket_type)
        assert ticket_type.quantity_sold == 10
        assert ticket_type.status == TicketTypeStatus.SOLD_OUT

    def test_reserve_over_capacity_reports_remaining(self, db, ticket_type_factory):
        """total=10, sold=8, reserve 3 is rejected with remaining=2."""
        ticket_type = ticket_type_factory(quantity_total=10, quantity_sold=8)

        with pytest.raises(CapacityExceeded) as exc_info:
            CapacityLedger(db).reserve(ticket_type.id, 3)

        assert exc_info.value.remaining == 2
        assert exc_info.value.to_dict()["remaining"] == 2
        db.refresh(ticket_type)
        assert ticket_type.quantity_sold == 8

    def test_reserve_sold_out_type(self, db, ticket_type_factory):
        """A sold out type rejects even a single ticket."""
        ticket_type = ticket_type_factory(quantity_total=5, quantity_sold=5,
                                          status=TicketTypeStatus.SOLD_OUT)

        with pytest.raises(CapacityExceeded) as exc_info:
            CapacityLedger(db).reserve(ticket_type.id, 1)

        assert exc_info.value.remaining == 0

    def test_reserve_unknown_type(self, db):
        """Unknown ticket types raise TicketTypeNotFound."""
        with pytest.raises(TicketTypeNotFound):
            CapacityLedger(db).reserve(str(uuid.uuid4()), 1)

    def test_reserve_paused_type(self, db, ticket_type_factory):
        """Paused types do not admit reservations."""
        ticket_type = ticket_type_factory(status=TicketTypeStatus.PAUSED)

        with pytest.raises(InvalidRequest):
            CapacityLedger(db).reserve(ticket_type.id, 1)

        db.refresh(ticket_type)
        assert ticket_type.quantity_sold == 0

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_reserve_non_positive_quantity(self, db, sample_ticket_type, quantity):
        """Zero or negative quantities never touch the counter."""
        with pytest.raises(InvalidRequest):
            CapacityLedger(db).reserve(sample_ticket_type.id, quantity)

        db.refresh(sample_ticket_type)
        assert sample_ticket_type.quantity_sold == 0

    def test_remaining(self, db, ticket_type_factory):
        """remaining() reports total minus sold."""
        ticket_type = ticket_type_factory(quantity_total=10, quantity_sold=6)

        assert CapacityLedger(db).remaining(ticket_type.id) == 4


# =============================================================================
# TEST: release
# =============================================================================
class TestRelease:
    """Test compensating releases."""

    def test_release_restores_previous_value(self, db, ticket_type_factory):
        """Reserve then release returns quantity_sold to where it started."""
        ticket_type = ticket_type_factory(quantity_total=10, quantity_sold=2)
        ledger = CapacityLedger(db)

        reservation = ledger.reserve(ticket_type.id, 5)
        ledger.release(reservation)

        db.refresh(ticket_type)
        assert ticket_type.quantity_sold == 2

    def test_release_reopens_sold_out_type(self, db, ticket_type_factory):
        """Releasing from a sold out type makes it active again."""
        ticket_type = ticket_type_factory(quantity_total=4, quantity_sold=0)
        ledger = CapacityLedger(db)

        reservation = ledger.reserve(ticket_type.id, 4)
        db.refresh(ticket_type)
        assert ticket_type.status == TicketTypeStatus.SOLD_OUT

        ledger.release(reservation)

        db.refresh(ticket_type)
        assert ticket_type.quantity_sold == 0
        assert ticket_type.status == TicketTypeStatus.ACTIVE

    def test_release_never_goes_negative(self, db, ticket_type_factory):
        """A release larger than the counter leaves it untouched."""
        ticket_type = ticket_type_factory(quantity_total=10, quantity_sold=1)

        CapacityLedger(db).release(Reservation(ticket_type_id=ticket_type.id, quantity=3))

        db.refresh(ticket_type)
        assert ticket_type.quantity_sold == 1


# =============================================================================
# TEST: concurrency
# =============================================================================
class TestConcurrentReservations:
    """Many callers racing against a small remaining capacity."""

    def _race(self, session_factory, ticket_type_id, quantities):
        barrier = threading.Barrier(len(quantities))

        def attempt(quantity):
            session = session_factory()
            try:
                barrier.wait()
                CapacityLedger(session).reserve(ticket_type_id, quantity)
                return quantity
            except CapacityExceeded:
                return 0
            finally:
                session.close()

        with ThreadPoolExecutor(max_workers=len(quantities)) as pool:
            return list(pool.map(attempt, quantities))

    def test_single_ticket_race_never_oversells(self, db, session_factory, ticket_type_factory):
        """20 callers for 5 remaining seats: exactly 5 succeed."""
        ticket_type = ticket_type_factory(quantity_total=10, quantity_sold=5)

        results = self._race(session_factory, ticket_type.id, [1] * 20)

        db.refresh(ticket_type)
        assert sum(results) == 5
        assert ticket_type.quantity_sold == 10
        assert ticket_type.status == TicketTypeStatus.SOLD_OUT

    @pytest.mark.parametrize("round_number", range(5))
    def test_mixed_quantity_race_respects_total(self, db, session_factory, ticket_type_factory, round_number):
        """Mixed batch sizes never push sold past total, and sold matches admitted."""
        ticket_type = ticket_type_factory(quantity_total=12, quantity_sold=0)
        quantities = [5, 4, 3, 2, 6, 1, 7, 2, 3, 5]

        results = self._race(session_factory, ticket_type.id, quantities)

        db.refresh(ticket_type)
        assert ticket_type.quantity_sold == sum(results)
        assert ticket_type.quantity_sold <= ticket_type.quantity_total
