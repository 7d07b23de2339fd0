from __future__ import annotations

import importlib
from dataclasses import dataclass

from .config import parse_ensemble_config
from .distribution import RandomDislocationDistribution
from .lattice import LatticeExtent
from .metrics import ensemble_violations
from .presets import make_default_ensemble_config


@dataclass
class CheckRow:
    name: str
    ok: bool
    detail: str


@dataclass
class SelfCheckReport:
    rows: list[CheckRow]

    @property
    def ok(self) -> bool:
        return all(row.ok for row in self.rows)

    def to_text(self) -> str:
        lines: list[str] = []
        for row in self.rows:
            status = "OK" if row.ok else "FAIL"
            lines.append(f"[{status}] {row.name}: {row.detail}")
        lines.append(f"overall: {'OK' if self.ok else 'FAIL'}")
        return "\n".join(lines)


def run_selfcheck(*, smoke: bool = True) -> SelfCheckReport:
    rows: list[CheckRow] = []

    for module_name in ("numpy", "scipy", "yaml", "matplotlib"):
        try:
            mod = importlib.import_module(module_name)
            version = getattr(mod, "__version__", "unknown")
            rows.append(CheckRow(module_name, True, f"version={version}"))
        except Exception as exc:
            rows.append(CheckRow(module_name, False, str(exc)))

    if smoke and all(row.ok for row in rows):
        for random_count in (True, False):
            name = "smoke-random" if random_count else "smoke-fixed"
            try:
                cfg = parse_ensemble_config(
                    make_default_ensemble_config(L=8, concentration=0.25, random_defect_number=random_count)
                )
                dist = RandomDislocationDistribution.from_config(cfg)
                extent = LatticeExtent(cfg.lattice.Lx, cfg.lattice.Ly)
                problems: list[str] = []
                sizes: list[int] = []
                for ensemble in dist.sample(20):
                    sizes.append(len(ensemble))
                    problems.extend(ensemble_violations(ensemble, extent.size))
                if problems:
                    rows.append(CheckRow(name, False, "; ".join(sorted(set(problems)))))
                else:
                    rows.append(CheckRow(name, True, f"ensembles={len(sizes)}, sizes={min(sizes)}..{max(sizes)}"))
            except Exception as exc:
                rows.append(CheckRow(name, False, str(exc)))

    return SelfCheckReport(rows=rows)
