"""Built-in action library, keyed by dimension id.

Used whenever a configuration does not ship its own action_library.
"""

from __future__ import annotations

from darwin.models.config import ConfigurationSnapshot, ParetoAction

_ALL_STAGES = ("pre_seed", "seed", "series_a")
_SEED_PLUS = ("seed", "series_a")


def _action(dimension_id: str, **fields: object) -> ParetoAction:
    return ParetoAction.model_validate({"dimension_id": dimension_id, **fields})


DEFAULT_ACTION_LIBRARY: dict[str, tuple[ParetoAction, ...]] = {
    "MN": (
        _action(
            "MN",
            id="MN-01",
            title="Validate unit economics with real data",
            description="Compute CAC, LTV and payback from current metrics.",
            first_step="Pull CAC for the last 3 months per channel.",
            done_definition="Spreadsheet with unit economics per cohort.",
            effort="S",
            time_to_impact_days=7,
            impact_weight=5,
            stage_tags=_SEED_PLUS,
            kpi_hint="LTV/CAC ratio",
        ),
        _action(
            "MN",
            id="MN-02",
            title="Test a new acquisition channel",
            description="Try an unexplored channel to diversify acquisition.",
            first_step="Pick one channel and set a test budget.",
            done_definition="Two-week test with measured CAC.",
            effort="M",
            time_to_impact_days=21,
            impact_weight=4,
            stage_tags=_SEED_PLUS,
        ),
        _action(
            "MN",
            id="MN-03",
            title="Document the pricing strategy",
            description="Formalize pricing logic and margins.",
            first_step="Map current prices against competitors.",
            done_definition="Approved pricing document.",
            effort="S",
            time_to_impact_days=5,
            impact_weight=3,
            stage_tags=("pre_seed", "seed"),
        ),
    ),
    "GT": (
        _action(
            "GT",
            id="GT-01",
            title="Define a North Star Metric",
            description="Align the team around one primary growth metric.",
            first_step="Alignment meeting on candidate metrics.",
            done_definition="NSM defined and visible on a dashboard.",
            effort="S",
            time_to_impact_days=3,
            impact_weight=5,
            stage_tags=_ALL_STAGES,
        ),
        _action(
            "GT",
            id="GT-02",
            title="Build the main growth loop",
            description="Create a viral or retention loop.",
            first_step="Map existing loops and pick the main one.",
            done_definition="Loop shipped and cycle metric measured.",
            effort="L",
            time_to_impact_days=45,
            impact_weight=5,
            stage_tags=_SEED_PLUS,
        ),
        _action(
            "GT",
            id="GT-03",
            title="Create a weekly metrics dashboard",
            description="Visibility over growth KPIs.",
            first_step="List the top 5 metrics and their data sources.",
            done_definition="Dashboard refreshed automatically.",
            effort="M",
            time_to_impact_days=14,
            impact_weight=3,
            stage_tags=_SEED_PLUS,
        ),
    ),
    "EE": (
        _action(
            "EE",
            id="EE-01",
            title="Map the end-to-end customer journey",
            description="Find friction points and opportunities.",
            first_step="Interview 5 customers about their experience.",
            done_definition="Journey map with prioritized pain points.",
            effort="M",
            time_to_impact_days=14,
            impact_weight=4,
            stage_tags=_SEED_PLUS,
        ),
        _action(
            "EE",
            id="EE-02",
            title="Run NPS or CSAT",
            description="Measure satisfaction on a recurring basis.",
            first_step="Choose a tool and draft the survey.",
            done_definition="First NPS round collected.",
            effort="S",
            time_to_impact_days=7,
            impact_weight=3,
            stage_tags=_SEED_PLUS,
        ),
    ),
    "FS": (
        _action(
            "FS",
            id="FS-01",
            title="Project runway under scenarios",
            description="Model optimistic, base and pessimistic cases.",
            first_step="Update the financial model with 3 scenarios.",
            done_definition="12-month projection with scenarios.",
            effort="S",
            time_to_impact_days=5,
            impact_weight=5,
            stage_tags=_ALL_STAGES,
            kpi_hint="Runway in months",
            addresses_red_flags=("RF_RUNWAY",),
        ),
        _action(
            "FS",
            id="FS-02",
            title="Cut burn rate by 15%",
            description="Find expenses that can go without hurting growth.",
            first_step="Categorize expenses by how essential they are.",
            done_definition="Reduced burn sustained for one month.",
            effort="M",
            time_to_impact_days=30,
            impact_weight=4,
            stage_tags=_SEED_PLUS,
            addresses_red_flags=("RF_RUNWAY", "RF_BURN"),
        ),
    ),
    "PM": (
        _action(
            "PM",
            id="PM-01",
            title="Validate product-market fit with data",
            description="Apply the Sean Ellis test or a retention analysis.",
            first_step='Send the "How disappointed would you be?" survey to 40+ users.',
            done_definition="PMF score computed.",
            effort="S",
            time_to_impact_days=10,
            impact_weight=5,
            stage_tags=_SEED_PLUS,
        ),
        _action(
            "PM",
            id="PM-02",
            title="Build a feedback-driven roadmap",
            description="Prioritize features with ICE/RICE.",
            first_step="Compile the top 10 customer requests.",
            done_definition="Prioritized 3-month roadmap.",
            effort="M",
            time_to_impact_days=14,
            impact_weight=3,
            stage_tags=_SEED_PLUS,
        ),
    ),
    "GR": (
        _action(
            "GR",
            id="GR-01",
            title="Formalize minimum governance",
            description="Advisory board, clean cap table, shareholder agreements.",
            first_step="Review the cap table and list open issues.",
            done_definition="Governance documentation up to date.",
            effort="M",
            time_to_impact_days=21,
            impact_weight=4,
            stage_tags=_SEED_PLUS,
        ),
        _action(
            "GR",
            id="GR-02",
            title="Send a monthly stakeholder report",
            description="Transparency with investors and advisors.",
            first_step="Create a monthly update template.",
            done_definition="First report sent.",
            effort="S",
            time_to_impact_days=7,
            impact_weight=3,
            stage_tags=_SEED_PLUS,
        ),
    ),
    "PT": (
        _action(
            "PT",
            id="PT-01",
            title="Adopt a lightweight agile process",
            description="Two-week sprints with retrospectives.",
            first_step="Set the cadence and tooling.",
            done_definition="First sprint completed with a retro.",
            effort="M",
            time_to_impact_days=14,
            impact_weight=4,
            stage_tags=("pre_seed", "seed"),
        ),
        _action(
            "PT",
            id="PT-02",
            title="Set quarterly OKRs",
            description="Align the team on clear objectives.",
            first_step="OKR workshop with the founders.",
            done_definition="Next-quarter OKRs defined and shared.",
            effort="S",
            time_to_impact_days=5,
            impact_weight=4,
            stage_tags=_SEED_PLUS,
        ),
    ),
    "PL": (
        _action(
            "PL",
            id="PL-01",
            title="Plan hiring for the next 6 months",
            description="Prioritize critical hires.",
            first_step="Map skill gaps against the roadmap.",
            done_definition="Approved hiring plan.",
            effort="S",
            time_to_impact_days=7,
            impact_weight=4,
            stage_tags=_SEED_PLUS,
        ),
        _action(
            "PL",
            id="PL-02",
            title="Hold weekly 1:1s",
            description="Tighten the feedback loop with the team.",
            first_step="Schedule recurring 1:1s.",
            done_definition="Cadence kept for 4 weeks.",
            effort="S",
            time_to_impact_days=3,
            impact_weight=3,
            stage_tags=_ALL_STAGES,
        ),
    ),
    "IC": (
        _action(
            "IC",
            id="IC-01",
            title="Document culture and values",
            description="Formalize the team's principles.",
            first_step="Values workshop with the founders.",
            done_definition="Culture document published.",
            effort="S",
            time_to_impact_days=7,
            impact_weight=3,
            stage_tags=_SEED_PLUS,
        ),
        _action(
            "IC",
            id="IC-02",
            title="Create a structured onboarding",
            description="Shorten time-to-productivity of new members.",
            first_step="Document key processes and an onboarding checklist.",
            done_definition="Next hire goes through the new onboarding.",
            effort="M",
            time_to_impact_days=21,
            impact_weight=3,
            stage_tags=_SEED_PLUS,
        ),
    ),
}


def get_action_library(config: ConfigurationSnapshot) -> dict[str, tuple[ParetoAction, ...]]:
    """Configured action library, or DEFAULT_ACTION_LIBRARY when absent or empty."""
    if config.action_library:
        return config.action_library
    return DEFAULT_ACTION_LIBRARY
