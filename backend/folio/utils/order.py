from folio.extensions import db

def compact_order(items, order_field="order_index", start=0):
    """
    Re-assigns sequential order values (start..start+N-1) to already
    ordered items. Only rows whose position actually moved are touched.
    """
    moved = []
    for index, item in enumerate(items, start=start):
        if getattr(item, order_field) != index:
            setattr(item, order_field, index)
            moved.append(item)

    db.session.flush()
    return moved
