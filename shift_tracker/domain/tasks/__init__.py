"""Tasks domain - per-visit care checklist"""
