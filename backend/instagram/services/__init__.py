"""Service layer.

Application services orchestrate use cases over units of work and the
security ports. Import concrete services from their subpackages
(:mod:`instagram.services.users`, :mod:`instagram.services.auth`); this
package stays import-light because adapters depend on
:mod:`instagram.services._shared`.
"""
