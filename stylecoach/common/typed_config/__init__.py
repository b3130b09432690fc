# stylecoach/common/typed_config - typed settings accessors
#
# Settings sections are typed as frozen dataclasses and exposed through
# get_<section>() methods.

from stylecoach.common.typed_config.models import (
    DEFAULT_DOMINANCE_THRESHOLD,
    DEFAULT_HYBRID_THRESHOLD,
    ClassifierConfig,
    safe_float,
    safe_str,
)
from stylecoach.common.typed_config.reader import (
    CLASSIFIER_SECTION,
    TypedConfigReader,
    load_config_file,
)

__all__ = [
    # Dataclasses
    "ClassifierConfig",
    # Reader
    "TypedConfigReader",
    "load_config_file",
    "CLASSIFIER_SECTION",
    # Defaults
    "DEFAULT_DOMINANCE_THRESHOLD",
    "DEFAULT_HYBRID_THRESHOLD",
    # Helper functions
    "safe_float",
    "safe_str",
]
