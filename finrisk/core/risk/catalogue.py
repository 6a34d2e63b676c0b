"""
Risk scenario catalogue.

Five hand-authored scenarios for the 2017 vs 2016 case. Impact, probability,
narrative, factors and mitigation are static content written from the case
figures (the narrative quotes numbers such as the 8.99% equity strength);
they are NOT recomputed from ratio values. Related ratios link each scenario
to the ratios that support it, for display.

Order matters: the first HEADLINE_RISK_COUNT entries are the headline risks.
"""

from dataclasses import dataclass

from finrisk.core.ratios.definitions import RatioName
from finrisk.core.risk.severity import validate_score


@dataclass(frozen=True)
class RiskScenario:
    id: int
    title: str
    description: str
    impact: int
    probability: int
    factors: tuple[str, ...]
    mitigation: tuple[str, ...]
    related_ratios: tuple[RatioName, ...]

    def __post_init__(self) -> None:
        validate_score(self.impact, "impact")
        validate_score(self.probability, "probability")
        if len(set(self.related_ratios)) != len(self.related_ratios):
            raise ValueError(f"Scenario {self.id} lists a related ratio twice")


RISK_CATALOGUE: tuple[RiskScenario, ...] = (
    RiskScenario(
        id=1,
        title="Insolvency Risk",
        description=(
            "Weak equity strength (8.99%) and heavy reliance on external financing "
            "raise the risk of insolvency under adverse conditions."
        ),
        impact=9,
        probability=6,
        factors=(
            "Equity represents only 8.99% of total assets",
            "High financial leverage (11.12 times)",
            "Equity strength down from the previous year (10.03%)",
            "Critical dependence on external financing",
        ),
        mitigation=(
            "Urgent financial restructuring to strengthen equity",
            "Capital increase or full reinvestment of earnings",
            "Divestment of non-strategic assets to reduce debt",
            "Debt renegotiation to improve terms and maturities",
        ),
        related_ratios=(RatioName.EQUITY_STRENGTH, RatioName.FINANCIAL_LEVERAGE),
    ),
    RiskScenario(
        id=2,
        title="Liquidity Risk",
        description=(
            "Low liquidity (0.55) and negative working capital compromise the "
            "company's ability to meet its short-term obligations."
        ),
        impact=8,
        probability=7,
        factors=(
            "Current liquidity (0.55) far below the 1.0 minimum",
            "Negative working capital (-1,027,674 thousand EUR)",
            "Low coverage of immediate current liabilities (cash / current liabilities: 0.15)",
            "Deterioration from the previous year (2016 liquidity: 0.59)",
        ),
        mitigation=(
            "Urgent negotiation with suppliers to extend payment terms",
            "Aggressive working capital optimization",
            "Refinancing of short-term debt",
            "Faster inventory turnover",
            "Stricter customer credit management",
        ),
        related_ratios=(
            RatioName.CURRENT_LIQUIDITY,
            RatioName.QUICK_LIQUIDITY,
            RatioName.IMMEDIATE_LIQUIDITY,
        ),
    ),
    RiskScenario(
        id=3,
        title="Operating Profitability Deterioration",
        description=(
            "A significant fall in operating margin and return on assets points to "
            "problems in the operating efficiency of the business."
        ),
        impact=7,
        probability=8,
        factors=(
            "EBIT margin down from 2.18% to 1.42%",
            "Operating ROA down from 4.97% to 3.43%",
            "Margins deteriorating despite a slight improvement in turnover",
            "Possible loss of operating efficiency or rising costs",
        ),
        mitigation=(
            "Detailed analysis of the cost structure",
            "Optimization of operating processes",
            "Review of pricing policy",
            "Profitability assessment by product line",
            "Company-wide operating efficiency plan",
        ),
        related_ratios=(RatioName.EBIT_MARGIN, RatioName.OPERATING_RETURN_ON_ASSETS),
    ),
    RiskScenario(
        id=4,
        title="Refinancing Risk",
        description=(
            "Low debt service capacity could make it hard to refinance on "
            "favourable terms."
        ),
        impact=6,
        probability=7,
        factors=(
            "Debt service capacity (EBITDA / financial debt) of 0.24",
            "Deterioration from the previous year (0.29)",
            "Possible increase in the financial cost of new operations",
            "Potential credit rating downgrade",
        ),
        mitigation=(
            "Diversification of funding sources",
            "Search for lower-cost financing alternatives",
            "Early refinancing to avoid unfavourable conditions",
            "EBITDA improvement through operating optimization",
        ),
        related_ratios=(RatioName.DEBT_SERVICE_CAPACITY,),
    ),
    RiskScenario(
        id=5,
        title="Market Risk",
        description=(
            "Falling sales and deteriorating margins suggest competitive pressure "
            "that could intensify."
        ),
        impact=7,
        probability=6,
        factors=(
            "Sales down from 8,867,621 to 8,620,550 thousand EUR (-2.8%)",
            "EBIT margin reduced by 35%",
            "Possible increase in competitive pressure in the sector",
            "Changes in consumer preferences or behaviour",
        ),
        mitigation=(
            "Market and competitor analysis",
            "Review of strategic positioning",
            "Renewal of the value proposition",
            "Product mix optimization",
            "Improved customer experience",
        ),
        related_ratios=(RatioName.EBIT_MARGIN,),
    ),
)
