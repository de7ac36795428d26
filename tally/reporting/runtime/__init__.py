"""Runtime: REST transport and the paging pipeline."""
