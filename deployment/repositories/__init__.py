from .descriptor_repository import DescriptorRepository
from .settings_repository import SettingsRepository

__all__ = [
    'DescriptorRepository',
    'SettingsRepository'
]
