"""
Harrell-Davis quantile estimator.

For a sorted sample x_(1) <= ... <= x_(n) and probability p, the estimate is
a weighted average of every order statistic:

    a = (n + 1) p,  b = (n + 1)(1 - p)
    w_i = I(i/n; a, b) - I((i - 1)/n; a, b)
    Q(p) = sum_i w_i x_(i)

which hd_quantile evaluates by parts over the spacings of the sample.
where I is the regularized incomplete beta function. At p = 0 and p = 1 the
estimate is the sample minimum and maximum.

Reference:
    Harrell, F.E. and Davis, C.E. (1982) "A new distribution-free quantile
    estimator", Biometrika, 69(3), 635-640.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyshotlength.core.compute.betainc import betainc_tails


def hd_weights(n: int, p: float) -> NDArray[np.floating[Any]]:
    """
    Harrell-Davis weights for one interior probability.

    Parameters
    ----------
    n : int
        Sample size, >= 1.
    p : float
        Probability in (0, 1).

    Returns
    -------
    NDArray
        Shape (n,), non-negative, summing to 1 up to rounding.
    """
    m = n + 1.0
    edges = np.arange(n + 1, dtype=np.float64) / n
    lower, upper = betainc_tails(p * m, (1.0 - p) * m, edges)

    # Difference whichever tail is small at the right edge of each cell so
    # that weights far out in the upper tail do not cancel.
    w = np.where(lower[1:] <= 0.5, np.diff(lower), -np.diff(upper))
    return np.maximum(w, 0.0)


def hd_weight_matrix(n: int, probs: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """
    Stack hd_weights for interior probabilities into an (n, k) matrix.
    """
    W = np.empty((n, len(probs)), dtype=np.float64)
    for j, p in enumerate(probs):
        W[:, j] = hd_weights(n, float(p))
    return W


def hd_tail_matrix(n: int, probs: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """
    Upper Beta tails U_k = 1 - I(k/n; a, b) at the cell edges k = 0..n.

    Returns an (n + 1, k) matrix with U_0 = 1 and U_n = 0 in every column.
    """
    m = n + 1.0
    edges = np.arange(n + 1, dtype=np.float64) / n
    U = np.empty((n + 1, len(probs)), dtype=np.float64)
    for j, p in enumerate(probs):
        _, U[:, j] = betainc_tails(float(p) * m, (1.0 - float(p)) * m, edges)
    return U


def hd_quantile(
    x: NDArray[np.floating[Any]],
    probs: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Harrell-Davis estimates at each probability.

    The weighted sum is evaluated by parts over the spacings of the sorted
    sample:

        Q(p) = x_(1) + sum_{k=1}^{n-1} U_k (x_(k+1) - x_(k))

    Spacings are non-negative and exactly zero inside a run of ties, so tied
    shot lengths contribute nothing and the estimate stays in
    [x_(1), x_(n)].

    Parameters
    ----------
    x : NDArray
        1D sorted array, no NaN, length >= 1.
    probs : NDArray
        1D array of probabilities in [0, 1].

    Returns
    -------
    NDArray
        One estimate per probability, in the order given.
    """
    probs = np.asarray(probs, dtype=np.float64)
    result = np.empty(len(probs), dtype=np.float64)

    result[probs == 0.0] = x[0]
    result[probs == 1.0] = x[-1]

    interior = (probs > 0.0) & (probs < 1.0)
    if np.any(interior):
        U = hd_tail_matrix(len(x), probs[interior])
        gaps = np.diff(x)
        q = x[0] + np.sum(gaps[:, None] * U[1:-1], axis=0)
        # Rounding in the sum can overshoot x_(n) by an ulp
        result[interior] = np.minimum(q, x[-1])

    return result


def hd_jackknife_se(
    x: NDArray[np.floating[Any]],
    probs: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Jackknife standard errors of the Harrell-Davis estimates.

    Uses all n leave-one-out estimates S_j:

        se = (n - 1) * sqrt(var(S) / n)

    with var taken over j using the n - 1 denominator. Dropping x_(j) from a
    sorted sample merges the spacings on either side of it. Indexing from 0,
    with d_k = x[k+1] - x[k] and U_k the upper tails for a sample of n - 1
    (U_0 = 1, U_{n-1} = 0), the estimate without x[j] is

        S_j = x[0] + sum_{k=1}^{j} U_k d_{k-1} + sum_{k=j}^{n-2} U_k d_k

    so all n estimates come from one prefix and one suffix cumulative sum.

    Parameters
    ----------
    x : NDArray
        1D sorted array, no NaN, length >= 3.
    probs : NDArray
        1D array of probabilities in [0, 1].
    """
    n = len(x)
    l = n - 1
    probs = np.asarray(probs, dtype=np.float64)
    S = np.empty((n, len(probs)), dtype=np.float64)

    # Leave-one-out extremes
    loo_min = np.full(n, x[0])
    loo_min[0] = x[1]
    loo_max = np.full(n, x[-1])
    loo_max[-1] = x[-2]
    S[:, probs == 0.0] = loo_min[:, None]
    S[:, probs == 1.0] = loo_max[:, None]

    interior = (probs > 0.0) & (probs < 1.0)
    if np.any(interior):
        U = hd_tail_matrix(l, probs[interior])          # (n, k)
        gaps = np.diff(x)[:, None]                      # (n - 1, 1)
        zero = np.zeros((1, U.shape[1]))
        prefix = np.vstack([zero, np.cumsum(U[1:] * gaps, axis=0)])
        suffix = np.vstack([np.cumsum((U[:-1] * gaps)[::-1], axis=0)[::-1], zero])
        S[:, interior] = np.clip(
            x[0] + prefix + suffix, loo_min[:, None], loo_max[:, None],
        )

    return l * np.sqrt(np.var(S, axis=0, ddof=1) / n)
