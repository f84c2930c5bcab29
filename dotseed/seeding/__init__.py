"""Configuration-to-secrets pipeline."""
from dotseed.seeding.seeder import SecretSeeder, SeedReport

__all__ = ['SecretSeeder', 'SeedReport']
