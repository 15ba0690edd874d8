"""
Seat layout generation for a new event.
"""
from inventory.models import Seat

ROW_PATTERN = (18, 20, 22, 24, 26, 28, 30, 30, 28, 26, 24, 22, 20, 18)


def row_label(index):
    """Spreadsheet-style label: 0 -> A, 25 -> Z, 26 -> AA, 27 -> AB"""
    label = ""
    n = index
    while True:
        label = chr(65 + n % 26) + label
        n = n // 26 - 1
        if n < 0:
            return label


def generate_seat_layout(event, total=None, pattern=ROW_PATTERN, section="Main"):
    """
    Bulk-create ``total`` seats (default: the event capacity) row by row, with
    row sizes cycling through ``pattern``. The last row is cut short so exactly
    ``total`` seats exist.
    """
    total = event.capacity if total is None else total
    if total < 0:
        raise ValueError("Seat total cannot be negative")
    if not pattern or any(size < 1 for size in pattern):
        raise ValueError("Row pattern must contain positive row sizes")

    seats = []
    row_index = 0
    while len(seats) < total:
        count = min(pattern[row_index % len(pattern)], total - len(seats))
        label = row_label(row_index)
        for col in range(count):
            seats.append(Seat(
                event_id=event,
                section=section,
                row_label=label,
                seat_number=col + 1,
                row_idx=row_index,
                col_idx=col,
            ))
        row_index += 1

    return Seat.objects.bulk_create(seats, batch_size=500)
