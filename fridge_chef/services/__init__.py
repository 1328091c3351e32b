# Presentation-side services
