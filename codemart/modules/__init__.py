"""Feature modules: users, assets, catalog, moderation, wishlist and reviews."""
