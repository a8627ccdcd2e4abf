"""
Ranking layer for the lunch map.

Responsibilities:
- Measure great-circle distance from the origin to every place.
- Sort places with coordinates by distance and assign stable ranks.
- Narrow the ranked list with category filters without renumbering.
- Derive display values (distance label, price band, stars) for renderers.
"""
