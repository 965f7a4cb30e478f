"""Archive-side core: version ordering, path convention, archiving, indexing."""
