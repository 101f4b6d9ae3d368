"""Allocation domain: centres, locations, assets and the allocations between them."""
