"""
Cumulative Ratio — Аналитический интеграл отношения двух оценок

Приближение суммы по правилу трапеций:
    Σ_{i=0}^{Δ-1} w(i) * N(t0+i) / D(t0+i),  w = 1 на концах, 2 внутри, всё / 2

вычисляется за O(1) как определённый интеграл отношения двух
аффинных функций N(t) = p1 + v1*t, D(t) = p2 + v2*t на [t0, t0 + Δ].

ФОРМУЛЫ:
    v2 = 0:   ∫ N/D dt = N(t_mid) * Δ / D(t_mid),  t_mid = t0 + Δ/2
    иначе:    ∫ N/D dt = [v1*v2*Δ + (p1*v2 - v1*p2) * (ln D(t0+Δ) - ln D(t0))] / v2²

Ветка v2 = 0 выделена явно: в общей формуле коэффициент 1/v2² не определён.
Любая ненулевая v2, сколь угодно малая, идёт через общую формулу.
Обе ветки сужают результат до Q.P одним делением с усечением к нулю.

Относительное расхождение с итеративной суммой трапеций — порядка
сотен ppm при Δ от тысяч до сотен тысяч эпох (граница эмпирическая:
оба метода приближения, расхождение убывает с ростом Δ).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. D(t) > 0 на всём [t0, t0 + Δ], иначе CumulativeRatioDomainError
2. При v = 0 результат равен Δ * p1 / p2 и не зависит от t0
3. Сдвиг опорной эпохи обеих оценок не меняет результат
"""

import logging

from src.core.math.fixed_point import PRECISION, Fixed
from src.core.math.natural_log import ln
from src.core.math.numerical_safeguards import (
    CumulativeRatioDomainError,
    validate_integer,
    validate_positive_integer,
)
from src.core.smoothing.estimate import SmoothedEstimate

logger = logging.getLogger(__name__)


def cumulative_ratio(
    numerator: SmoothedEstimate,
    denominator: SmoothedEstimate,
    start_epoch: int,
    epoch_count: int,
) -> Fixed:
    """
    Накопленная сумма отношения numerator / denominator по epoch_count эпохам.

    Args:
        numerator: Оценка числителя N
        denominator: Оценка знаменателя D
        start_epoch: Смещение начала диапазона относительно опорной эпохи оценок
        epoch_count: Длина диапазона Δ (> 0)

    Returns:
        Приближение суммы в Q.P

    Raises:
        CumulativeRatioDomainError: Если D(t) ≤ 0 где-либо на [t0, t0 + Δ]
        ValueError: Если epoch_count ≤ 0
        TypeError: Если эпохи не int

    Examples:
        >>> num = SmoothedEstimate.constant(4_000_000)
        >>> den = SmoothedEstimate.constant(1)
        >>> cumulative_ratio(num, den, 0, 1000).to_int()
        4000000000
    """
    validate_integer(start_epoch, "start_epoch")
    validate_positive_integer(epoch_count, "epoch_count")

    end_epoch = start_epoch + epoch_count

    # D аффинна: положительность на концах ⇔ положительность на всём отрезке
    denom_start = denominator.extrapolate(start_epoch)  # Q.2P
    denom_end = denominator.extrapolate(end_epoch)  # Q.2P
    if denom_start.sign() <= 0 or denom_end.sign() <= 0:
        raise CumulativeRatioDomainError(
            f"Denominator must stay positive over epochs [{start_epoch}, {end_epoch}]: "
            f"D(start)={denom_start.to_int()}, D(end)={denom_end.to_int()}"
        )

    if denominator.velocity.sign() == 0:
        logger.debug("cumulative_ratio: linear branch, epochs=%d", epoch_count)
        return _linear_cumulative_ratio(numerator, denominator, start_epoch, epoch_count)

    logger.debug("cumulative_ratio: logarithmic branch, epochs=%d", epoch_count)

    p1, v1 = numerator.position, numerator.velocity
    p2, v2 = denominator.position, denominator.velocity
    delta_t = Fixed.from_int(epoch_count)  # Q.P
    velocity_squared = (v2 * v2).rescale(3 * PRECISION)  # Q.2P → Q.3P (расширение, точно)

    log_delta = ln(denom_end) - ln(denom_start)  # Q.2P

    linear_term = (v1 * v2 * delta_t).rescale(4 * PRECISION)  # Q.3P → Q.4P
    cross = p1 * v2 - v1 * p2  # Q.2P
    log_term = cross * log_delta  # Q.2P * Q.2P → Q.4P

    # Q.4P / Q.3P → Q.P, усечение к нулю как в линейной ветке
    return (linear_term + log_term) / velocity_squared


def _linear_cumulative_ratio(
    numerator: SmoothedEstimate,
    denominator: SmoothedEstimate,
    start_epoch: int,
    epoch_count: int,
) -> Fixed:
    """N(t_mid) * Δ / D(t_mid): точный интеграл при v2 = 0."""
    delta_t = Fixed.from_int(epoch_count)  # Q.P
    t_mid = Fixed.from_int(start_epoch) + delta_t.shift(-1)  # Q.P

    numerator_mid = numerator.position.rescale(2 * PRECISION) + numerator.velocity * t_mid
    denominator_mid = denominator.position.rescale(2 * PRECISION) + denominator.velocity * t_mid

    # Q.2P * Q.P → Q.3P; Q.3P / Q.2P → Q.P
    return (numerator_mid * delta_t) / denominator_mid
