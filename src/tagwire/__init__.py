from tagwire.container import Container
from tagwire.defaults import AUTO_INJECTION_TAG
from tagwire.exceptions import (
    TagwireAmbiguousTypeError,
    TagwireDuplicateNameError,
    TagwireError,
    TagwireInvalidNameError,
    TagwireInvalidTagError,
    TagwireNameError,
    TagwireNotAssignableError,
    TagwireNotFoundError,
    TagwireNotFoundForTypeError,
    TagwireNotInjectableError,
    TagwireNotRegisteredError,
    TagwireReservedNameError,
    TagwireSecondResultNotErrorError,
    TagwireTypeLookupError,
    TagwireUnsupportedFactoryError,
)
from tagwire.factory import Factory
from tagwire.markers import Autowired, Inject

__all__ = [
    "AUTO_INJECTION_TAG",
    "Autowired",
    "Container",
    "Factory",
    "Inject",
    "TagwireAmbiguousTypeError",
    "TagwireDuplicateNameError",
    "TagwireError",
    "TagwireInvalidNameError",
    "TagwireInvalidTagError",
    "TagwireNameError",
    "TagwireNotAssignableError",
    "TagwireNotFoundError",
    "TagwireNotFoundForTypeError",
    "TagwireNotInjectableError",
    "TagwireNotRegisteredError",
    "TagwireReservedNameError",
    "TagwireSecondResultNotErrorError",
    "TagwireTypeLookupError",
    "TagwireUnsupportedFactoryError",
]
