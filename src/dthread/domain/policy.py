"""ConfigPolicy: domain ordering and the cross-domain link rules.

The policy supplies the total order of domains used by both the layout
engine (container placement, edge typing) and the relationship
gatekeeper (adjacency checks). Persisting it is the caller's job.
"""

from __future__ import annotations

from collections.abc import Sequence

from dthread.domain.errors import PolicyViolation, UnknownDomainError, ValidationError


class ConfigPolicy:
    """Ordered domain names plus the adjacency-only flag.

    Args:
        domain_order: Domain names, no duplicates.
        allow_only_adjacent_connections: Restrict links to consecutive domains.
        allow_backward: When adjacency-only is off, also permit backward and
            same-domain links. Forward links of any distance are always
            allowed in that mode.
    """

    def __init__(
        self,
        domain_order: Sequence[str],
        allow_only_adjacent_connections: bool = True,
        *,
        allow_backward: bool = False,
    ) -> None:
        order = list(domain_order)
        duplicates = sorted({d for d in order if order.count(d) > 1})
        if duplicates:
            msg = f"Duplicate domains in order: {', '.join(duplicates)}"
            raise ValidationError(msg, duplicates=duplicates)
        self._order = order
        self._adjacent_only = bool(allow_only_adjacent_connections)
        self._allow_backward = allow_backward

    def __repr__(self) -> str:
        return (
            f"ConfigPolicy(domain_order={self._order!r}, "
            f"allow_only_adjacent_connections={self._adjacent_only!r})"
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_domain_order(self) -> list[str]:
        return list(self._order)

    def get_adjacency_only(self) -> bool:
        return self._adjacent_only

    def set_adjacency_only(self, flag: bool) -> None:
        self._adjacent_only = bool(flag)

    def set_domain_order(self, new_order: Sequence[str]) -> None:
        """Replace the order with a permutation of the current domain set.

        Raises:
            ValidationError: If *new_order* adds, drops, or repeats a domain.
        """
        proposed = list(new_order)
        if len(proposed) != len(set(proposed)):
            msg = "Domain order must not contain duplicates"
            raise ValidationError(msg, domain_order=proposed)
        if set(proposed) != set(self._order):
            added = sorted(set(proposed) - set(self._order))
            removed = sorted(set(self._order) - set(proposed))
            msg = "Domain order must be a permutation of the configured domains"
            raise ValidationError(msg, added=added, removed=removed)
        self._order = proposed

    def move_domain(self, domain: str, offset: int) -> None:
        """Swap *domain* with the neighbour *offset* positions away (-1 up, +1 down).

        Moves that would leave the list are ignored.
        """
        index = self.index_of(domain)
        swap = index + offset
        if swap < 0 or swap >= len(self._order):
            return
        order = list(self._order)
        order[index], order[swap] = order[swap], order[index]
        self._order = order

    # ------------------------------------------------------------------
    # Ordering helpers
    # ------------------------------------------------------------------

    def __contains__(self, domain: object) -> bool:
        return domain in self._order

    def index_of(self, domain: str) -> int:
        """Position of *domain* in the order.

        Raises:
            UnknownDomainError: If *domain* is not configured.
        """
        try:
            return self._order.index(domain)
        except ValueError:
            msg = f"Unknown domain: {domain!r}"
            raise UnknownDomainError(msg, domain=domain) from None

    def next_domain(self, domain: str) -> str | None:
        """The domain immediately after *domain*, or None if it is last."""
        index = self.index_of(domain)
        if index + 1 < len(self._order):
            return self._order[index + 1]
        return None

    # ------------------------------------------------------------------
    # Link rules
    # ------------------------------------------------------------------

    def check_link(self, from_domain: str, to_domain: str) -> None:
        """Validate a proposed link between two domains.

        Raises:
            UnknownDomainError: If either domain is not configured.
            PolicyViolation: If the ordering rule forbids the link.
        """
        unknown = [d for d in (from_domain, to_domain) if d not in self]
        if unknown:
            msg = f"Invalid domain names provided: {from_domain}, {to_domain}"
            raise UnknownDomainError(msg, unknown=unknown)

        from_index = self._order.index(from_domain)
        to_index = self._order.index(to_domain)

        if self._adjacent_only:
            if to_index != from_index + 1:
                expected = self.next_domain(from_domain)
                msg = (
                    "Connections are only allowed between adjacent domains in the "
                    f"current order ({from_domain} -> {expected or 'none'})"
                )
                raise PolicyViolation(
                    msg,
                    rule="adjacent_only",
                    from_domain=from_domain,
                    to_domain=to_domain,
                    expected=expected,
                )
            return

        if to_index <= from_index and not self._allow_backward:
            msg = (
                f"Backward or same-domain connections are not allowed "
                f"({from_domain} -> {to_domain})"
            )
            raise PolicyViolation(
                msg,
                rule="forward_only",
                from_domain=from_domain,
                to_domain=to_domain,
            )
