"""
Statistical checks for the fairness of shuffled deals.

A fair deal puts every card in every hand with a probability proportional to
the hand's size. This module deals many seeded games, tabulates where each card
ended up, and runs a chi-square test of independence between card and hand.
"""

import argparse
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np
import scipy.stats as stats

from treasurechest.common.deck import create_deck, deal_cards
from treasurechest.game.constants import DEFAULT_NUM_PLAYERS


@dataclass
class DealFairnessReport:
    """
    Result of a deal fairness analysis.

    Attributes:
        num_deals: Number of deals tabulated
        num_players: Number of hands per deal
        counts: Matrix of shape (cards, players); cell [c, p] counts how often
            card c was dealt to hand p
        statistic: Chi-square statistic of the card/hand table
        p_value: Probability of a table at least this skewed under a fair deal
        degrees_of_freedom: Degrees of freedom of the test
        alpha: Significance level the verdict is taken at
    """

    num_deals: int
    num_players: int
    counts: np.ndarray
    statistic: float
    p_value: float
    degrees_of_freedom: int
    alpha: float

    @property
    def is_uniform(self) -> bool:
        """True when the test does not reject a fair deal at ``alpha``."""
        return self.p_value >= self.alpha

    def hand_share(self) -> np.ndarray:
        """Fraction of all dealt cards that went to each hand."""
        return self.counts.sum(axis=0) / self.counts.sum()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary."""
        return {
            "num_deals": self.num_deals,
            "num_players": self.num_players,
            "statistic": self.statistic,
            "p_value": self.p_value,
            "degrees_of_freedom": self.degrees_of_freedom,
            "alpha": self.alpha,
            "is_uniform": self.is_uniform,
            "hand_share": self.hand_share().tolist(),
        }


def tabulate_deals(
    num_deals: int, num_players: int, rng: random.Random
) -> np.ndarray:
    """
    Deal ``num_deals`` shuffled decks and count card-to-hand placements.

    Returns:
        Integer matrix of shape (52, num_players)
    """
    deck = create_deck()
    card_index = {card.id: index for index, card in enumerate(deck)}
    counts = np.zeros((len(deck), num_players), dtype=np.int64)

    for _ in range(num_deals):
        for hand_index, hand in enumerate(deal_cards(deck, num_players, rng)):
            for card in hand:
                counts[card_index[card.id], hand_index] += 1

    return counts


def analyze_deal_fairness(
    num_deals: int,
    num_players: int = DEFAULT_NUM_PLAYERS,
    seed: Optional[int] = None,
    alpha: float = 0.01,
    rng: Optional[random.Random] = None,
) -> DealFairnessReport:
    """
    Test whether shuffled deals place cards in hands uniformly.

    Args:
        num_deals: Number of deals to tabulate; at least 2
        num_players: Number of hands per deal; at least 2
        seed: Seed for a fresh ``random.Random`` when ``rng`` is not given
        alpha: Significance level for :attr:`DealFairnessReport.is_uniform`
        rng: Random source to shuffle with

    Returns:
        A DealFairnessReport
    """
    if num_deals < 2:
        raise ValueError("At least 2 deals are needed to test fairness")
    if num_players < 2:
        raise ValueError("At least 2 hands are needed to test fairness")

    rng = rng or random.Random(seed)
    counts = tabulate_deals(num_deals, num_players, rng)

    # Hands that never receive a card (more seats than cards) carry no signal
    observed = counts[:, counts.sum(axis=0) > 0]
    statistic, p_value, dof, _ = stats.chi2_contingency(observed, correction=False)

    return DealFairnessReport(
        num_deals=num_deals,
        num_players=num_players,
        counts=counts,
        statistic=float(statistic),
        p_value=float(p_value),
        degrees_of_freedom=int(dof),
        alpha=alpha,
    )


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Check that shuffled treasure chest deals are fair."
    )
    parser.add_argument(
        "-d",
        "--deals",
        type=int,
        default=1000,
        help="number of deals to tabulate (default: 1000)",
    )
    parser.add_argument(
        "-p",
        "--players",
        type=int,
        default=DEFAULT_NUM_PLAYERS,
        help=f"number of hands per deal (default: {DEFAULT_NUM_PLAYERS})",
    )
    parser.add_argument("-s", "--seed", type=int, default=None, help="random seed")
    parser.add_argument(
        "-a",
        "--alpha",
        type=float,
        default=0.01,
        help="significance level (default: 0.01)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    report = analyze_deal_fairness(
        args.deals, args.players, seed=args.seed, alpha=args.alpha
    )

    print(f"Tabulated {report.num_deals} deals to {report.num_players} hands.")
    print(
        f"chi-square = {report.statistic:.2f} "
        f"(dof = {report.degrees_of_freedom}), p = {report.p_value:.4f}"
    )
    for hand_index, share in enumerate(report.hand_share()):
        print(f"Hand {hand_index + 1} received {share * 100:.2f}% of the cards.")
    print("Deals look fair." if report.is_uniform else "Deals look biased!")
    return 0 if report.is_uniform else 1


if __name__ == "__main__":
    raise SystemExit(main())
