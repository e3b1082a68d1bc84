from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class QueryTemplate:
    name: str
    description: str
    category: str
    query: str


TEMPLATES: List[QueryTemplate] = [
    QueryTemplate(
        name="Top Customers by Revenue",
        description="Find your highest value customers",
        category="Revenue",
        query="""SELECT customer_id, customer_name, SUM(order_total) as total_revenue
FROM customers
JOIN orders ON customers.customer_id = orders.customer_id
GROUP BY customer_id, customer_name
ORDER BY total_revenue DESC
LIMIT 10""",
    ),
    QueryTemplate(
        name="Email Campaign Performance",
        description="Analyze open and click rates",
        category="Marketing",
        query="""SELECT campaign_name,
  COUNT(*) as emails_sent,
  SUM(opened) as total_opens,
  SUM(clicked) as total_clicks,
  ROUND(SUM(opened) * 100.0 / COUNT(*), 2) as open_rate,
  ROUND(SUM(clicked) * 100.0 / COUNT(*), 2) as click_rate
FROM email_campaigns
GROUP BY campaign_name
ORDER BY open_rate DESC""",
    ),
    QueryTemplate(
        name="Lead Source ROI",
        description="Compare lead sources by conversion",
        category="Sales",
        query="""SELECT lead_source,
  COUNT(*) as total_leads,
  SUM(converted) as conversions,
  ROUND(SUM(converted) * 100.0 / COUNT(*), 2) as conversion_rate,
  AVG(revenue) as avg_revenue
FROM leads
GROUP BY lead_source
ORDER BY conversion_rate DESC""",
    ),
    QueryTemplate(
        name="Recent Customer Activity",
        description="See who purchased recently",
        category="Activity",
        query="""SELECT customer_name, email, last_purchase_date,
  julianday('now') - julianday(last_purchase_date) as days_ago
FROM customers
WHERE last_purchase_date IS NOT NULL
ORDER BY last_purchase_date DESC
LIMIT 10""",
    ),
    QueryTemplate(
        name="Customers at Risk (Churn)",
        description="Identify inactive customers",
        category="Retention",
        query="""SELECT customer_id, customer_name, last_purchase_date,
  julianday('now') - julianday(last_purchase_date) as days_since_purchase
FROM customers
WHERE days_since_purchase > 90
ORDER BY days_since_purchase DESC""",
    ),
    QueryTemplate(
        name="All Customers List",
        description="Simple customer directory",
        category="Basic",
        query="""SELECT customer_id, customer_name, email, signup_date
FROM customers
ORDER BY signup_date DESC""",
    ),
]


def get_template(name: str) -> Optional[QueryTemplate]:
    for t in TEMPLATES:
        if t.name == name:
            return t
    return None
