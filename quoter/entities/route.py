"""A validated chain of pairs from an input currency to an output currency."""

from __future__ import annotations

from collections.abc import Sequence
from functools import cached_property

from quoter.entities.currency import Currency, Token
from quoter.entities.pair import Pair
from quoter.entities.price import Price
from quoter.errors import invariant


class Route:
    """Pairs connecting ``input`` to ``output``.

    ``path`` lists the (wrapped) tokens visited, starting at
    ``input.wrapped``. When no output currency is given it is the last token
    of the path.
    """

    def __init__(
        self,
        pairs: Sequence[Pair],
        input_currency: Currency,
        output_currency: Currency | None = None,
    ) -> None:
        invariant(len(pairs) > 0, "PAIRS", "a route needs at least one pair")
        chain_id = pairs[0].chain_id
        invariant(all(pair.chain_id == chain_id for pair in pairs), "CHAIN_IDS", "pairs span several chains")

        wrapped_input = input_currency.wrapped
        invariant(pairs[0].involves_token(wrapped_input), "INPUT", f"{input_currency} is not in the first pair")
        invariant(
            output_currency is None or pairs[-1].involves_token(output_currency.wrapped),
            "OUTPUT",
            f"{output_currency} is not in the last pair",
        )

        path: list[Token] = [wrapped_input]
        for i, pair in enumerate(pairs):
            current = path[i]
            invariant(pair.involves_token(current), "PATH", f"pair {i} does not contain {current}")
            path.append(pair.other_token(current))

        if output_currency is not None:
            invariant(path[-1] == output_currency.wrapped, "OUTPUT", f"path ends at {path[-1]}, not {output_currency}")

        self.pairs: tuple[Pair, ...] = tuple(pairs)
        self.path: tuple[Token, ...] = tuple(path)
        self.input = input_currency
        self.output: Currency = output_currency if output_currency is not None else path[-1]

    @cached_property
    def mid_price(self) -> Price:
        """Product of the spot prices along the path, in input->output terms."""
        prices = [
            pair.token0_price if self.path[i] == pair.token0 else pair.token1_price
            for i, pair in enumerate(self.pairs)
        ]
        reduced = prices[0]
        for price in prices[1:]:
            reduced = reduced.multiply(price)
        return Price(self.input, self.output, reduced.denominator, reduced.numerator)

    @property
    def chain_id(self) -> int:
        return self.pairs[0].chain_id

    def __len__(self) -> int:
        return len(self.pairs)

    def __repr__(self) -> str:
        return f"Route({' -> '.join(str(token) for token in self.path)})"


__all__ = ["Route"]
