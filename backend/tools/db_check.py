import sqlite3
import sys

DB = sys.argv[1] if len(sys.argv) > 1 else "dev.db"
INVOICE_ID = sys.argv[2] if len(sys.argv) > 2 else None

conn = sqlite3.connect(DB)
cur = conn.cursor()

print("=== Invoices ===")
if INVOICE_ID:
    cur.execute(
        "SELECT id, customer_id, amount, status, date FROM invoices WHERE id=?",
        (INVOICE_ID,),
    )
else:
    cur.execute(
        "SELECT id, customer_id, amount, status, date FROM invoices ORDER BY date DESC LIMIT 20"
    )
for r in cur.fetchall():
    print(
        {
            "id": r[0],
            "customer_id": r[1],
            "amount_cents": r[2],
            "status": r[3],
            "date": r[4],
        }
    )

print("\n=== Customers ===")
cur.execute("SELECT id, name, email FROM customers ORDER BY name LIMIT 50")
for r in cur.fetchall():
    print(r)

conn.close()
