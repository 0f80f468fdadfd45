"""
Restaurant Directory API.

A FastAPI service over a single restaurants table: create, look up and
delete restaurants, submit ratings and query the top-rated
restaurants by cuisine, by region or by both.
"""
