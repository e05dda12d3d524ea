from .errors import ConfigError, JTCError, MalformedJSON, MalformedSchema
from .findings import DiagnosticSink, Finding, Severity
from .runner import PairReport, check_directory, check_pair, parse_data, validate_pair
from .scope import DefinitionScope
from .typedef import Kind, SchemaNode, load_typedef_file, parse_typedef
from .validator import Validator, validate

__all__ = [
    "ConfigError",
    "JTCError",
    "MalformedJSON",
    "MalformedSchema",
    "DiagnosticSink",
    "Finding",
    "Severity",
    "PairReport",
    "check_directory",
    "check_pair",
    "parse_data",
    "validate_pair",
    "DefinitionScope",
    "Kind",
    "SchemaNode",
    "load_typedef_file",
    "parse_typedef",
    "Validator",
    "validate",
]
