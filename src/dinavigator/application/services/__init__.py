"""Application services: linking, aggregation, graph building, engine, queries."""
