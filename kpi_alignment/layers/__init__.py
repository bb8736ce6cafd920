"""
Architecture layers:
- data_ingestion: loading KPI tables and exporting results
- analysis: heuristic alignment passes
"""
