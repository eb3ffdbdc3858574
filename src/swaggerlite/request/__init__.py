"""Turn operation definitions plus caller input into httpx request arguments.

Sub-modules:

* :mod:`~swaggerlite.request.param_mapper` -- merges path- and
  operation-level parameters and routes each input value to its location.
* :mod:`~swaggerlite.request.uri_template` -- expands ``{name}`` path
  templates.
"""

from swaggerlite.request.param_mapper import PATH_PARAMS_KEY, ParameterMapper
from swaggerlite.request.uri_template import expand

__all__ = ["ParameterMapper", "PATH_PARAMS_KEY", "expand"]
