from .templates_api import TemplatesApi
from .template_types_api import TemplateTypesApi
from .versions_api import VersionsApi

__all__ = ["TemplatesApi", "TemplateTypesApi", "VersionsApi"]
