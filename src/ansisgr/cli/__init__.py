"""ansisgr command line interface."""
