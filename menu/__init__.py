"""Describes the daily menu domain. Centres around today's `DayMenu`.

Why is this small?

- Dish lists are edited by hand, a handful of names per category.
- Generation is random sampling with a recency filter.
- The only state is two JSON blobs, the catalog and a three-day history.
- No invariants beyond de-duplication and the history cap.

Keep the sampling pure and push the blobs behind a store so the rest can be
tested without a database.
"""
