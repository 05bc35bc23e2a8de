# utils/ranking.py
from typing import List, Sequence, Tuple


def rank_quotes(quotes: Sequence) -> List[Tuple[object, bool]]:
    """Sort quotes by unit price, cheapest first, and flag the best price.

    ``sorted`` is stable, so quotes with equal prices keep the order in which
    they were fetched. Returns ``(quote, is_best_price)`` pairs.
    """
    ordered = sorted(quotes, key=lambda q: float(q.price_per_unit_usd))
    return [(q, i == 0) for i, q in enumerate(ordered)]
