"""Historical sat-denominated exchange rates with interpolated cross-rates."""
