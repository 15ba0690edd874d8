"""
Dashboard snapshot: seat and ticket counts per event, recent check-ins and
the email queue backlog, aggregated in a handful of grouped queries.
"""
from collections import defaultdict
from datetime import timedelta

from django.db.models import Count, F, Sum
from django.db.models.functions import TruncMinute
from django.utils import timezone

from SeatDesk.utils import enum_label
from events.models import Events
from inventory.models import Seat
from mailer.models import EmailQueue
from tickets.models import Ticket

SEAT_KEYS = ("available", "reserved", "sold", "blocked")
TICKET_KEYS = ("active", "used", "cancelled")
QUEUE_KEYS = ("pending", "sending", "sent", "failed")


def _seat_counts():
    counts = defaultdict(lambda: dict.fromkeys(SEAT_KEYS, 0))
    rows = Seat.objects.values('event_id', 'status').annotate(count=Count('seat_id'))
    for row in rows:
        key = enum_label(Seat.SEAT_STATUS, row['status']) or "available"
        counts[row['event_id']][key] = row['count']
    return counts


def _ticket_counts():
    counts = defaultdict(lambda: {"total": 0, **dict.fromkeys(TICKET_KEYS, 0), "revenue": 0.0})
    rows = Ticket.objects.values('event_id', 'status').annotate(count=Count('ticket_id'), revenue=Sum('price'))
    for row in rows:
        entry = counts[row['event_id']]
        entry["total"] += row['count']
        entry[enum_label(Ticket.TICKET_STATUS, row['status'])] += row['count']
        entry["revenue"] += float(row['revenue'] or 0)
    return counts


def _checkin_history(since):
    history = defaultdict(list)
    rows = (
        Ticket.objects.filter(status=Ticket.TICKET_STATUS.USED, used_at__gte=since)
        .annotate(bucket=TruncMinute('used_at'))
        .values('event_id', 'bucket')
        .annotate(count=Count('ticket_id'))
        .order_by('bucket')
    )
    for row in rows:
        history[row['event_id']].append({
            "bucket": row['bucket'].isoformat() if row['bucket'] else None,
            "count": row['count'],
        })
    return history


def _checkins_since(since):
    rows = (
        Ticket.objects.filter(status=Ticket.TICKET_STATUS.USED, used_at__gte=since)
        .values('event_id')
        .annotate(count=Count('ticket_id'))
    )
    return {row['event_id']: row['count'] for row in rows}


def _queue_summary():
    summary = dict.fromkeys(QUEUE_KEYS, 0)
    for row in EmailQueue.objects.values('status').annotate(count=Count('email_queue_id')):
        summary[enum_label(EmailQueue.EMAIL_STATUS, row['status']) or "pending"] = row['count']
    return summary


def build_snapshot(now=None):
    now = now or timezone.now()
    events = Events.objects.order_by(F('starts_at').asc(nulls_last=True), '-created_at')

    seats_by_event = _seat_counts()
    tickets_by_event = _ticket_counts()
    history_by_event = _checkin_history(now - timedelta(hours=1))
    last_five_by_event = _checkins_since(now - timedelta(minutes=5))

    totals = {
        "events": 0,
        "capacity": 0,
        "seats": dict.fromkeys(SEAT_KEYS, 0),
        "tickets": {**dict.fromkeys(TICKET_KEYS, 0), "total": 0},
        "revenue": 0.0,
        "checkIns": {"lastHour": 0, "lastFiveMinutes": 0},
    }
    events_summary = []

    for event in events:
        seats = dict(seats_by_event[event.events_id])
        tickets = dict(tickets_by_event[event.events_id])
        history = history_by_event.get(event.events_id, [])
        last_hour = sum(item["count"] for item in history)
        last_five = last_five_by_event.get(event.events_id, 0)

        engaged = tickets["active"] + tickets["used"]
        occupancy = min(1, engaged / event.capacity) if event.capacity else None

        totals["events"] += 1
        totals["capacity"] += event.capacity or 0
        for key in SEAT_KEYS:
            totals["seats"][key] += seats[key]
        for key in TICKET_KEYS:
            totals["tickets"][key] += tickets[key]
            totals["tickets"]["total"] += tickets[key]
        totals["revenue"] += tickets["revenue"]
        totals["checkIns"]["lastHour"] += last_hour
        totals["checkIns"]["lastFiveMinutes"] += last_five

        events_summary.append({
            "id": str(event.events_id),
            "name": event.event_name,
            "description": event.description,
            "posterUrl": event.poster_url,
            "startsAt": event.starts_at.isoformat() if event.starts_at else None,
            "endsAt": event.ends_at.isoformat() if event.ends_at else None,
            "capacity": event.capacity,
            "seats": seats,
            "tickets": tickets,
            "occupancy": occupancy,
            "checkIns": {
                "lastFiveMinutes": last_five,
                "lastHour": last_hour,
                "history": history,
            },
        })

    return {
        "generatedAt": now.isoformat(),
        "totals": totals,
        "queue": _queue_summary(),
        "events": events_summary,
    }
