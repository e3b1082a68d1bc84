# демо-данные маркетинговой БД; значения фиксированы (на них завязаны шаблоны и тесты)

SEED_STATEMENTS = [
    """
    CREATE TABLE customers (
      customer_id INTEGER PRIMARY KEY,
      customer_name TEXT,
      email TEXT,
      signup_date DATE,
      last_purchase_date DATE
    )
    """,
    """
    INSERT INTO customers VALUES
      (1, 'Acme Corp', 'contact@acme.com', '2024-01-15', '2024-11-01'),
      (2, 'Tech Solutions Inc', 'info@techsol.com', '2024-02-20', '2024-10-28'),
      (3, 'Global Traders', 'sales@globaltraders.com', '2024-03-10', '2024-06-15'),
      (4, 'Startup Hub', 'hello@startuphub.com', '2024-04-05', '2024-10-30'),
      (5, 'Enterprise Co', 'contact@enterprise.com', '2024-05-12', '2024-11-02')
    """,
    """
    CREATE TABLE orders (
      order_id INTEGER PRIMARY KEY,
      customer_id INTEGER,
      order_total REAL,
      order_date DATE
    )
    """,
    """
    INSERT INTO orders VALUES
      (1, 1, 5000.00, '2024-11-01'),
      (2, 2, 3500.00, '2024-10-28'),
      (3, 1, 7500.00, '2024-10-15'),
      (4, 4, 2000.00, '2024-10-30'),
      (5, 5, 10000.00, '2024-11-02'),
      (6, 2, 4500.00, '2024-09-20'),
      (7, 3, 1500.00, '2024-06-15')
    """,
    """
    CREATE TABLE email_campaigns (
      campaign_id INTEGER PRIMARY KEY,
      campaign_name TEXT,
      sent_date DATE,
      opened INTEGER,
      clicked INTEGER
    )
    """,
    """
    INSERT INTO email_campaigns VALUES
      (1, 'Summer Sale 2024', '2024-06-01', 1, 1),
      (2, 'Summer Sale 2024', '2024-06-01', 1, 0),
      (3, 'Product Launch', '2024-07-15', 1, 1),
      (4, 'Product Launch', '2024-07-15', 0, 0),
      (5, 'Newsletter Sept', '2024-09-01', 1, 0)
    """,
    """
    CREATE TABLE leads (
      lead_id INTEGER PRIMARY KEY,
      lead_source TEXT,
      converted INTEGER,
      revenue REAL
    )
    """,
    """
    INSERT INTO leads VALUES
      (1, 'Google Ads', 1, 5000),
      (2, 'LinkedIn', 1, 7500),
      (3, 'Google Ads', 0, 0),
      (4, 'Referral', 1, 3000),
      (5, 'LinkedIn', 0, 0),
      (6, 'Organic Search', 1, 2500),
      (7, 'Google Ads', 1, 4000)
    """,
]
