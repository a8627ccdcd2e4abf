"""
Feed ingestion package for the lunch map service.

Responsibilities:
- Fetch the published spreadsheet feed (CSV or TSV) over HTTP.
- Split each line into raw fields, honouring quoted segments.
- Normalize every row into a canonical Place record with safe defaults.
"""
