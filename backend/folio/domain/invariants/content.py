from folio.content.payload import parse_content, PayloadError
from .exceptions import InvariantViolation

def assert_section_order(items):
    orders = [item.order_index for item in items]
    if not orders:
        return

    expected = list(range(len(orders)))
    if sorted(orders) != expected:
        raise InvariantViolation(
            f"Content orders are not consecutive starting from 0: {orders}"
        )

def assert_item_content(item):
    try:
        payload = parse_content(item.content_type, item.content)
    except PayloadError as exc:
        raise InvariantViolation(f"Content item {item.id} has a malformed payload: {exc}") from exc

    if payload.is_empty():
        raise InvariantViolation(
            f"{item.content_type} item {item.id} has empty content and cannot be persisted."
        )

def assert_section_content(section_key, items):
    for item in items:
        if item.section != section_key:
            raise InvariantViolation(
                f"Content item {item.id} belongs to {item.section}, not {section_key}."
            )
        assert_item_content(item)

    assert_section_order(items)
