"""Domain services: business rules over the repository ports."""
