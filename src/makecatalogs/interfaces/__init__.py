# SPDX-License-Identifier: MIT
"""Interface modules aggregating protocols for makecatalogs collaborators.

Import the specific interface modules (e.g. ``makecatalogs.interfaces.repo``)
directly instead of relying on re-exports.
"""

__all__: tuple[str, ...] = ()
