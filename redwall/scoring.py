"""
Ranking scores for the 'hot' and 'controversial' sort modes, modelled on the formulas reddit
published for its own listings.
"""

from math import log10

# 2005-12-08 07:46:43 UTC, the zero point of reddit's hot ranking
EPOCH_ANCHOR = 1134028003

# seconds of age that are worth one order of magnitude of score
HEAT_PERIOD = 45000


def heat(candidate) -> float:
    """
    Time-weighted popularity. Every HEAT_PERIOD seconds of recency is worth as much as a tenfold
    increase in score, so fresh posts with modest scores outrank old posts with large ones.
    """

    score = candidate.score
    order = log10(max(score, 1))

    if score > 0:
        sign = 1
    elif score < 0:
        sign = -1
    else:
        sign = 0

    seconds = candidate.created_at - EPOCH_ANCHOR
    return round(sign * order + seconds / HEAT_PERIOD, 7)


def controversy(candidate) -> float:
    """
    Reward many votes that are evenly split between up and down. Returns 0 when either vote count
    is unknown (negative) or when there are no votes at all.
    """

    ups, downs = candidate.upvotes, candidate.downvotes

    if ups < 0 or downs < 0:
        return 0

    if ups == 0 and downs == 0:
        return 0

    magnitude = ups + downs
    balance = downs / ups if ups > downs else ups / downs

    return magnitude**balance
