"""HTTP API consumed by the rendering front end."""
