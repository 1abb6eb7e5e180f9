"""Business rules that sit between the routers and the models."""
