"""PharmaNature storefront backend."""
