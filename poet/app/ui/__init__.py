"""Web front-ends for poet."""
