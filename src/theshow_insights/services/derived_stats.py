"""Rate-stat finalizers: counting record in, frozen line out.

Every rate divides by zero as 0.0. Innings are carried as outs and only
turned into ``outs / 3`` here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from theshow_insights.domain.stat_lines import (
    BallparkRecord,
    BattingLine,
    HitterLine,
    PitcherLine,
    PitchingLine,
)

if TYPE_CHECKING:
    from theshow_insights.domain.stat_lines import (
        BallparkCounts,
        BattingCounts,
        HitterCounts,
        PitcherCounts,
        PitchingCounts,
    )


def _ratio(num: float, den: float) -> float:
    return num / den if den else 0.0


def _per_nine(value: int, outs: int) -> float:
    return _ratio(value * 9, outs / 3)


def on_base_pct(h: int, bb: int, hbp: int, ab: int, sf: int) -> float:
    return _ratio(h + bb + hbp, ab + bb + hbp + sf)


def total_bases(singles: int, doubles: int, triples: int, hr: int) -> int:
    return singles + 2 * doubles + 3 * triples + 4 * hr


def finalize_batting(c: BattingCounts) -> BattingLine:
    tb = total_bases(c.singles, c.doubles, c.triples, c.hr)
    pa = c.ab + c.bb + c.hbp + c.sf
    avg = _ratio(c.h, c.ab)
    obp = on_base_pct(c.h, c.bb, c.hbp, c.ab, c.sf)
    slg = _ratio(tb, c.ab)
    return BattingLine(
        ab=c.ab,
        r=c.r,
        h=c.h,
        singles=c.singles,
        doubles=c.doubles,
        triples=c.triples,
        hr=c.hr,
        rbi=c.rbi,
        bb=c.bb,
        so=c.so,
        hbp=c.hbp,
        sf=c.sf,
        sh=c.sh,
        sb=c.sb,
        cs=c.cs,
        gidp=c.gidp,
        tb=tb,
        pa=pa,
        avg=avg,
        obp=obp,
        slg=slg,
        ops=obp + slg,
        iso=slg - avg,
        babip=_ratio(c.h - c.hr, c.ab - c.so - c.hr + c.sf),
        sb_pct=_ratio(c.sb, c.sb + c.cs),
        k_pct=_ratio(c.so, pa),
        bb_pct=_ratio(c.bb, pa),
        xbh_pct=_ratio(c.doubles + c.triples + c.hr, pa),
    )


def finalize_pitching(c: PitchingCounts, opp_batting: BattingLine | None = None) -> PitchingLine:
    """Finalize a staff line; ``opp_batting`` supplies the slash line allowed.

    Opponent OBP/SLG use the staff's ``opp_ab`` as the at-bat denominator.
    """
    ip = c.outs / 3
    opp_obp = opp_slg = 0.0
    if opp_batting is not None:
        opp_obp = on_base_pct(opp_batting.h, opp_batting.bb, opp_batting.hbp, c.opp_ab, opp_batting.sf)
        opp_slg = _ratio(opp_batting.tb, c.opp_ab)
    return PitchingLine(
        outs=c.outs,
        ip=ip,
        h=c.h,
        r=c.r,
        er=c.er,
        bb=c.bb,
        so=c.so,
        hr=c.hr,
        opp_ab=c.opp_ab,
        whip=_ratio(c.bb + c.h, ip),
        era=_per_nine(c.er, c.outs),
        k9=_per_nine(c.so, c.outs),
        bb9=_per_nine(c.bb, c.outs),
        hr9=_per_nine(c.hr, c.outs),
        fip_raw=_ratio(13 * c.hr + 3 * c.bb - 2 * c.so, ip),
        opp_obp=opp_obp,
        opp_slg=opp_slg,
        opp_ops=opp_obp + opp_slg,
    )


def finalize_hitter(c: HitterCounts) -> HitterLine:
    singles = c.h - c.doubles - c.triples - c.hr
    tb = total_bases(singles, c.doubles, c.triples, c.hr)
    obp = on_base_pct(c.h, c.bb, c.hbp, c.ab, c.sf)
    slg = _ratio(tb, c.ab)
    return HitterLine(
        g=c.g,
        ab=c.ab,
        h=c.h,
        doubles=c.doubles,
        triples=c.triples,
        hr=c.hr,
        bb=c.bb,
        so=c.so,
        hbp=c.hbp,
        sf=c.sf,
        sh=c.sh,
        gidp=c.gidp,
        sb=c.sb,
        cs=c.cs,
        e=c.e,
        pb=c.pb,
        tb=tb,
        avg=_ratio(c.h, c.ab),
        obp=obp,
        slg=slg,
        ops=obp + slg,
        sb_pct=_ratio(c.sb, c.sb + c.cs),
    )


def finalize_pitcher(c: PitcherCounts) -> PitcherLine:
    ip = c.outs / 3
    return PitcherLine(
        g=c.g,
        outs=c.outs,
        ip=ip,
        h=c.h,
        r=c.r,
        er=c.er,
        bb=c.bb,
        so=c.so,
        hr=c.hr,
        era=_per_nine(c.er, c.outs),
        whip=_ratio(c.bb + c.h, ip),
        k9=_per_nine(c.so, c.outs),
        bb9=_per_nine(c.bb, c.outs),
        hr9=_per_nine(c.hr, c.outs),
    )


def finalize_ballpark(c: BallparkCounts) -> BallparkRecord:
    obp = on_base_pct(c.h, c.bb, c.hbp, c.ab, c.sf)
    slg = _ratio(c.tb, c.ab)
    return BallparkRecord(
        g=c.g,
        w=c.w,
        l=c.l,
        runs_for=c.runs_for,
        runs_against=c.runs_against,
        hr_for=c.hr_for,
        hr_against=c.hr_against,
        ops=obp + slg,
    )
