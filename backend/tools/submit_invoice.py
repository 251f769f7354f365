import argparse
import concurrent.futures
import os

import requests

BASE = os.environ.get("DASHBOARD_BASE", "http://127.0.0.1:8000")
INVOICES = f"{BASE}/dashboard/invoices"


def create_task(i, customer_id, amount, status):
    form = {"customerId": customer_id, "amount": amount, "status": status}
    try:
        r = requests.post(f"{INVOICES}/create", data=form, allow_redirects=False, timeout=10)
        return (i, "create", r.status_code, r.headers.get("location") or r.text)
    except requests.RequestException as e:
        return (i, "create", "ERR", str(e))


def run_create(workers, customer_id, amount, status):
    print(f"Submitting create form: workers={workers}, customer={customer_id}, amount={amount}, status={status}")
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(create_task, i, customer_id, amount, status) for i in range(workers)]
        for f in futures:
            print(f.result())


def run_edit(invoice_id, customer_id, amount, status):
    form = {"customerId": customer_id, "amount": amount, "status": status}
    r = requests.post(f"{INVOICES}/{invoice_id}/edit", data=form, allow_redirects=False, timeout=10)
    print(r.status_code, r.headers.get("location") or r.text)


def run_delete(invoice_id):
    r = requests.post(f"{INVOICES}/{invoice_id}/delete", timeout=10)
    print(r.status_code, r.text)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Submit invoice forms to a running dashboard backend.")
    sub = parser.add_subparsers(dest="mode", required=True)

    c = sub.add_parser("create")
    c.add_argument("--customer", required=True)
    c.add_argument("--amount", default="15.50")
    c.add_argument("--status", default="pending")
    c.add_argument("--workers", type=int, default=1)

    e = sub.add_parser("edit")
    e.add_argument("invoice_id")
    e.add_argument("--customer", required=True)
    e.add_argument("--amount", required=True)
    e.add_argument("--status", default="pending")

    d = sub.add_parser("delete")
    d.add_argument("invoice_id")

    args = parser.parse_args()

    if args.mode == "create":
        run_create(args.workers, args.customer, args.amount, args.status)
    elif args.mode == "edit":
        run_edit(args.invoice_id, args.customer, args.amount, args.status)
    elif args.mode == "delete":
        run_delete(args.invoice_id)
