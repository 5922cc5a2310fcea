"""IP geolocation."""
