"""
Built-in default datasets.

Served (and persisted) when neither the backend nor the local cache has
anything for a collection. Content is fixed; only timestamps follow the clock.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


def _iso(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


def default_teams(now: Optional[datetime] = None) -> List[dict]:
    created = _iso(_now(now))
    return [
        {
            "id": "1",
            "name": "Windhoek Warriors",
            "division": "Premier",
            "coach": "David Muller",
            "players_count": 15,
            "created_at": created,
        },
        {
            "id": "2",
            "name": "Swakopmund Strikers",
            "division": "Premier",
            "coach": "Anna Shipanga",
            "players_count": 12,
            "created_at": created,
        },
        {
            "id": "3",
            "name": "Walvis Bay Wolves",
            "division": "Division 1",
            "coach": "Thomas Shilongo",
            "players_count": 14,
            "created_at": created,
        },
    ]


def default_players(now: Optional[datetime] = None) -> List[dict]:
    created = _iso(_now(now))
    roster = [
        ("1", "John Smith", "1", "Forward", 10, 12, 5),
        ("2", "Maria Nangolo", "1", "Midfielder", 8, 5, 10),
        ("3", "David Shikongo", "2", "Defender", 4, 1, 3),
        ("4", "Sarah Hausiku", "3", "Goalkeeper", 1, 0, 0),
    ]
    return [
        {
            "id": player_id,
            "name": name,
            "team_id": team_id,
            "position": position,
            "jersey_number": jersey,
            "stats": {"goals": goals, "assists": assists},
            "created_at": created,
        }
        for player_id, name, team_id, position, jersey, goals, assists in roster
    ]


def default_events(now: Optional[datetime] = None) -> List[dict]:
    current = _now(now)
    created = _iso(current)

    def in_days(days: int) -> str:
        return _iso(current + timedelta(days=days))

    return [
        {
            "id": "1",
            "title": "National Championship Finals",
            "description": "The final match of the National Hockey Championship",
            "location": "Windhoek Stadium",
            "date": in_days(7),
            "time": "15:00",
            "teams": ["Windhoek Warriors", "Swakopmund Strikers"],
            "type": "match",
            "status": "upcoming",
            "created_at": created,
            "registration_deadline": in_days(7),
            "image": "https://example.com/national-championship-finals.jpg",
        },
        {
            "id": "2",
            "title": "Junior Training Camp",
            "description": "Training camp for junior hockey players",
            "location": "Swakopmund Sports Center",
            "date": in_days(14),
            "time": "09:00",
            "teams": [],
            "type": "training",
            "status": "upcoming",
            "created_at": created,
            "registration_deadline": in_days(14),
            "image": "https://example.com/junior-training-camp.jpg",
        },
        {
            "id": "3",
            "title": "Regional Tournament",
            "description": "Regional hockey tournament featuring teams from across Namibia",
            "location": "Walvis Bay Hockey Field",
            "date": in_days(21),
            "time": "10:00",
            "teams": ["Windhoek Warriors", "Swakopmund Strikers", "Walvis Bay Wolves"],
            "type": "tournament",
            "status": "upcoming",
            "created_at": created,
            "registration_deadline": in_days(21),
            "image": "https://example.com/regional-tournament.jpg",
        },
    ]


def default_chat_messages(viewer_id: str, now: Optional[datetime] = None) -> List[dict]:
    current = _now(now)
    return [
        {
            "id": "1",
            "sender_id": "admin1",
            "sender_name": "Admin",
            "sender_email": "admin@namibiahockey.com",
            "message": "Welcome to the Global Hockey Chat! All messages are visible to everyone.",
            "is_admin": True,
            "created_at": _iso(current - timedelta(hours=1)),
            "read_by_ids": [viewer_id],
        },
        {
            "id": "2",
            "sender_id": "coach456",
            "sender_name": "Coach Johnson",
            "sender_email": "coach.johnson@namibiahockey.com",
            "message": "Hi everyone! Use this chat to communicate with the whole team.",
            "is_admin": False,
            "created_at": _iso(current - timedelta(minutes=50)),
            "read_by_ids": [viewer_id],
        },
    ]
