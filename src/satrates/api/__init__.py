"""HTTP API for sat-denominated prices and cross-rates."""
