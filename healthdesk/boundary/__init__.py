"""External service boundaries: vector indexes, Vectorize.io, web search."""
