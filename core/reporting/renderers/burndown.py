from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
from matplotlib import ticker
from matplotlib.dates import date2num

from core.reporting.contexts import BurndownChartContext


class BurndownPngRenderer:
    def render(self, ctx: BurndownChartContext, output_path: Path) -> Path:
        if not ctx.points:
            raise ValueError("No progress points available for burndown chart")
        output_path.parent.mkdir(parents=True, exist_ok=True)

        days = [p.day for p in ctx.points]
        roles = list(ctx.points[0].role_percent)

        fig, ax = plt.subplots(figsize=(10, 4))
        for role in roles:
            ax.plot(
                days,
                [p.role_percent.get(role, 0.0) for p in ctx.points],
                label=role.upper(),
                linewidth=1,
                color=ctx.role_colors.get(role),
            )
        ax.plot(days, [p.percent_done for p in ctx.points], label="Total", color="black", linewidth=2)
        ax.plot(days, [p.ideal_percent for p in ctx.points], label="Ideal", color="gray", linestyle="--", linewidth=1)

        ax.axvline(date2num(ctx.calculated_delivery_date), color="#2563eb", linestyle=":", linewidth=1)
        if ctx.target_delivery_date:
            ax.axvline(date2num(ctx.target_delivery_date), color="red", linestyle="--", linewidth=1)
        if days[0] <= ctx.today <= days[-1]:
            ax.axvline(date2num(ctx.today), color="orange", linewidth=0.8)

        locator = mdates.AutoDateLocator(minticks=4, maxticks=10)
        ax.xaxis.set_major_locator(locator)
        ax.xaxis.set_major_formatter(mdates.ConciseDateFormatter(locator))
        ax.xaxis.set_minor_locator(ticker.NullLocator())

        ax.set_ylim(0, 105)
        ax.set_ylabel("% done")
        ax.set_title(f"Burndown - {ctx.project_name}")
        ax.grid(True, axis="y", linestyle=":", linewidth=0.6)
        ax.legend(loc="upper left", fontsize=8)

        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
        plt.close(fig)

        return output_path
