# backend/tests/services/test_mentor_pricing_service.py
import pytest

from app.core.exceptions import MentorNotFoundException, PricingValidationException
from app.models.mentor_service import MentorService
from app.services.mentor_pricing_service import MentorPricingService


def _item(name, mentor_price=100, platform_fee=10, taxes_fee=5):
    return {
        "mentorshipService": name,
        "mentorSessionPrice": mentor_price,
        "platformFee": platform_fee,
        "taxesFee": taxes_fee,
        "totalPrice": mentor_price + platform_fee + taxes_fee,
    }


def test_replace_swaps_the_whole_list(db, test_mentor, test_service):
    service = MentorPricingService(db)
    created = service.replace_services(test_mentor.id, [_item("Mock interview"), _item("Resume review", 50)])

    names = {s.service_name for s in service.list_own_services(test_mentor.id)}
    assert names == {"Mock interview", "Resume review"}
    assert len(created) == 2
    assert db.query(MentorService).filter_by(service_name="Career guidance").count() == 0


def test_failed_validation_leaves_rows_untouched(db, test_mentor, test_service):
    service = MentorPricingService(db)
    bad = _item("Broken")
    bad["totalPrice"] += 1

    with pytest.raises(PricingValidationException) as exc_info:
        service.replace_services(test_mentor.id, [_item("Fine"), bad])

    assert exc_info.value.details == {"index": 1}
    rows = service.list_own_services(test_mentor.id)
    assert [r.service_name for r in rows] == ["Career guidance"]


def test_empty_list_clears_services(db, test_mentor, test_service):
    service = MentorPricingService(db)
    assert service.replace_services(test_mentor.id, []) == []
    assert service.list_own_services(test_mentor.id) == []


def test_public_listing_requires_a_mentor(db, test_student):
    with pytest.raises(MentorNotFoundException):
        MentorPricingService(db).list_public_services(test_student.id)


def test_replace_does_not_touch_other_mentors(db, test_mentor, test_mentor_2, test_service):
    MentorPricingService(db).replace_services(test_mentor_2.id, [_item("Career guidance")])
    assert db.query(MentorService).filter_by(mentor_id=test_mentor.id).count() == 1
    assert db.query(MentorService).filter_by(mentor_id=test_mentor_2.id).count() == 1
