"""Loading side of tangram: loaders, front matter, templates and site data."""

from tangram.environment.exceptions import (
    ErrorCode,
    FrontMatterError,
    SiteConfigError,
    TangramError,
    TemplateNotFoundError,
)
from tangram.environment.loaders import DictLoader, FileSystemLoader, Loader
from tangram.environment.properties import merge_properties
from tangram.environment.repository import (
    SiteData,
    Template,
    classify_path,
    document_properties,
    get_layout,
    get_wrapper,
    load_site_data,
    load_template,
)

__all__ = [
    "DictLoader",
    "ErrorCode",
    "FileSystemLoader",
    "FrontMatterError",
    "Loader",
    "SiteConfigError",
    "SiteData",
    "TangramError",
    "Template",
    "TemplateNotFoundError",
    "classify_path",
    "document_properties",
    "get_layout",
    "get_wrapper",
    "load_site_data",
    "load_template",
    "merge_properties",
]
