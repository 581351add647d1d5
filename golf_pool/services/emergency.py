"""Synthetic leaderboard served only when every real tier is unavailable.

The numbers are made up. Results built from it are tagged ``mock-data`` so
clients can label them as such.
"""

from __future__ import annotations

from typing import Any, Dict, List

EMERGENCY_LEADERBOARD: List[Dict[str, Any]] = [
    {"position": 1, "name": "Scottie Scheffler", "score": -8, "today": -3, "thru": "F"},
    {"position": 2, "name": "Rory McIlroy", "score": -7, "today": -2, "thru": "F"},
    {"position": 3, "name": "Bryson DeChambeau", "score": -6, "today": -1, "thru": "F"},
    {"position": 3, "name": "Ludvig Åberg", "score": -6, "today": -4, "thru": "F"},
    {"position": 5, "name": "Collin Morikawa", "score": -5, "today": 0, "thru": "F"},
    {"position": 6, "name": "Xander Schauffele", "score": -4, "today": -1, "thru": "F"},
    {"position": 6, "name": "Jon Rahm", "score": -4, "today": 1, "thru": "F"},
    {"position": 8, "name": "Tommy Fleetwood", "score": -3, "today": -2, "thru": "F"},
    {"position": 8, "name": "Shane Lowry", "score": -3, "today": 0, "thru": "F"},
    {"position": 10, "name": "Hideki Matsuyama", "score": -2, "today": 1, "thru": "F"},
    {"position": 10, "name": "Justin Thomas", "score": -2, "today": -1, "thru": "F"},
    {"position": 12, "name": "Patrick Cantlay", "score": -1, "today": 2, "thru": "F"},
    {"position": 12, "name": "Joaquín Niemann", "score": -1, "today": 0, "thru": "F"},
    {"position": 14, "name": "Cameron Smith", "score": 0, "today": 1, "thru": "F"},
    {"position": 14, "name": "Min Woo Lee", "score": 0, "today": -1, "thru": "F"},
    {"position": 16, "name": "Russell Henley", "score": 1, "today": 2, "thru": "F"},
    {"position": 16, "name": "Sepp Straka", "score": 1, "today": 0, "thru": "F"},
    {"position": 18, "name": "Brooks Koepka", "score": 2, "today": 3, "thru": "F"},
    {"position": 18, "name": "Robert MacIntyre", "score": 2, "today": 1, "thru": "F"},
    {"position": 20, "name": "Jordan Spieth", "score": 3, "today": 2, "thru": "F"},
    {"position": 20, "name": "Viktor Hovland", "score": 3, "today": 4, "thru": "F"},
    {"position": 22, "name": "Will Zalatoris", "score": 4, "today": 1, "thru": "F"},
    {"position": 23, "name": "Sergio Garcia", "score": 6, "today": 5, "thru": "F", "status": "cut"},
    {"position": 24, "name": "Wyndham Clark", "score": 7, "today": 4, "thru": "F", "status": "cut"},
    {"position": 25, "name": "Tony Finau", "score": 5, "today": 0, "thru": 9, "status": "withdrawn"},
]


__all__ = ["EMERGENCY_LEADERBOARD"]
