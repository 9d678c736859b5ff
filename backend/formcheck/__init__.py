# formcheck exports
from formcheck.config import settings, get_settings
from formcheck.logging import (
    configure_logging,
    get_logger,
    bind_context,
    clear_context,
    validation_logger,
    store_logger,
)
from formcheck.validation import (
    Requirement,
    requirement,
    Leaf,
    Group,
    as_requirement_tree,
    LeafResult,
    NodeResult,
    validate_value,
    validate_values,
    RequirementStore,
    merge_requirements,
    FormValidator,
    ValidationError,
    RequirementTreeError,
)

__version__ = "0.1.0"
