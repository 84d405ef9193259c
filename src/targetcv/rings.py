"""环值表与小数计分（纯函数，无 IO）。

ISSF 10m 气步枪靶：
- 黑色瞄准圆半径 85mm（用作像素/毫米标定的参照物）；
- 每环宽 11.5mm，共 10 环，115mm 以外为脱靶（0 分）；
- 10 环内部再线性细分：圆心 10.9，向外递减到 10.0；
- 其余各环在环内线性插值：内边界 ring+1，外边界 ring。

边界约定：比较用 `<=`，正好落在边界上的距离归属内侧（分数更高的一环）。
因此 11.5mm 处是 10.0，而 11.5mm 往外一点立刻变成 9.99…，这是 ISSF 的既定行为。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ZoneRule(str, Enum):
    # 10 环：max_score - (d / width) * decimal_span
    TENTHS = "tenths"
    # 普通环：ring + (1 - t)，t = (d - lower) / width
    LINEAR = "linear"


@dataclass(frozen=True)
class ScoringZone:
    """一个计分区间：(lower_mm, upper_mm] 映射到一个整数环。"""

    upper_mm: float
    ring: int
    rule: ZoneRule


@dataclass(frozen=True)
class RingScheme:
    """一种靶型的静态环值表。

    Attributes:
        name: 靶型标识（配置里用这个名字选择）。
        black_circle_radius_mm: 黑色瞄准圆的物理半径（标定参照）。
        zone_width_mm: 每环宽度。
        zones: 按 upper_mm 升序排列的计分区间。
        center_score: 圆心处的最高小数分。
        center_span: 10 环内部细分的分数跨度（10.9 -> 10.0 即 0.9）。
    """

    name: str
    black_circle_radius_mm: float
    zone_width_mm: float
    zones: tuple[ScoringZone, ...]
    center_score: float
    center_span: float

    @property
    def miss_boundary_mm(self) -> float:
        return self.zones[-1].upper_mm

    def score(self, distance_mm: float) -> float:
        """把到中心的距离（mm）映射为小数环值。"""

        d = float(distance_mm)
        lower = 0.0
        for zone in self.zones:
            if d <= zone.upper_mm:
                if zone.rule is ZoneRule.TENTHS:
                    return self.center_score - ((d - lower) / self.zone_width_mm) * self.center_span
                t = (d - lower) / self.zone_width_mm
                return zone.ring + (1.0 - t)
            lower = zone.upper_mm
        return 0.0

    def ring_for_distance(self, distance_mm: float) -> int:
        """整数环值（10..1），脱靶返回 0。"""

        d = float(distance_mm)
        for zone in self.zones:
            if d <= zone.upper_mm:
                return int(zone.ring)
        return 0


ISSF_10M_AIR_RIFLE = RingScheme(
    name="issf_10m_air_rifle",
    black_circle_radius_mm=85.0,
    zone_width_mm=11.5,
    zones=(
        ScoringZone(11.5, 10, ZoneRule.TENTHS),
        ScoringZone(23.0, 9, ZoneRule.LINEAR),
        ScoringZone(34.5, 8, ZoneRule.LINEAR),
        ScoringZone(46.0, 7, ZoneRule.LINEAR),
        ScoringZone(57.5, 6, ZoneRule.LINEAR),
        ScoringZone(69.0, 5, ZoneRule.LINEAR),
        ScoringZone(80.5, 4, ZoneRule.LINEAR),
        ScoringZone(92.0, 3, ZoneRule.LINEAR),
        ScoringZone(103.5, 2, ZoneRule.LINEAR),
        ScoringZone(115.0, 1, ZoneRule.LINEAR),
    ),
    center_score=10.9,
    center_span=0.9,
)

_SCHEMES: dict[str, RingScheme] = {
    ISSF_10M_AIR_RIFLE.name: ISSF_10M_AIR_RIFLE,
}


def available_ring_schemes() -> list[str]:
    return sorted(_SCHEMES.keys())


def get_ring_scheme(name: str) -> RingScheme:
    """按名字取静态环值表。"""

    key = str(name).strip().lower()
    try:
        return _SCHEMES[key]
    except KeyError:
        raise ValueError(
            f"unknown ring scheme: {name} (expected: {'|'.join(available_ring_schemes())})"
        ) from None


def score(distance_mm: float, scheme: RingScheme = ISSF_10M_AIR_RIFLE) -> float:
    """`scheme.score` 的函数式入口。"""

    return scheme.score(distance_mm)
