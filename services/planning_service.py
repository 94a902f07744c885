import math

from models.records import (
    BUDGET_GROUPS,
    FREQUENCY_FACTORS,
    OneTimeCost,
    RecurringCost,
    generate_id,
)


class PlanningService:
    """Needs/wants planning budget: monthly-equivalent totals and cost edits."""

    @staticmethod
    def monthly_amount(cost):
        """Monthly equivalent of a recurring cost (amount x 1, 1/3 or 1/12)."""
        return cost.monthly_amount

    @staticmethod
    def total_monthly_recurring(budget, group):
        return sum(PlanningService.monthly_amount(c) for c in budget.group(group).recurring)

    @staticmethod
    def total_one_time(budget, group):
        return sum(c.amount for c in budget.group(group).one_time)

    @staticmethod
    def get_summary(budget):
        """Per-group totals plus combined figures for the page header."""
        summary = {}
        for group in BUDGET_GROUPS:
            summary[group] = {
                'monthly_recurring': PlanningService.total_monthly_recurring(budget, group),
                'one_time': PlanningService.total_one_time(budget, group),
            }
        summary['monthly_recurring'] = sum(summary[g]['monthly_recurring'] for g in BUDGET_GROUPS)
        summary['one_time'] = sum(summary[g]['one_time'] for g in BUDGET_GROUPS)
        return summary

    @staticmethod
    def save_cost(budget, group, kind, name, amount, frequency='monthly', cost_id=None):
        """
        Add a cost, or update the one with *cost_id*, in place.

        Raises ValueError for a blank name, a negative or non-finite amount,
        an unknown frequency, or a *cost_id* that is not in the list.
        """
        name = (name or '').strip()
        if not name:
            raise ValueError('Description is required')
        amount = float(amount)
        if not math.isfinite(amount):
            raise ValueError('Amount must be a finite number')
        if amount < 0:
            raise ValueError('Amount cannot be negative')
        if kind == 'recurring' and frequency not in FREQUENCY_FACTORS:
            raise ValueError(f'Unknown frequency: {frequency}')

        costs = budget.group(group).costs(kind)

        if cost_id:
            for cost in costs:
                if cost.id == cost_id:
                    cost.name = name
                    cost.amount = amount
                    if kind == 'recurring':
                        cost.frequency = frequency
                    return cost
            raise ValueError('Cost not found')

        new_id = generate_id(c.id for c in costs)
        if kind == 'recurring':
            cost = RecurringCost(id=new_id, name=name, amount=amount, frequency=frequency)
        else:
            cost = OneTimeCost(id=new_id, name=name, amount=amount)
        costs.append(cost)
        return cost

    @staticmethod
    def delete_cost(budget, group, kind, cost_id):
        """Remove a cost in place; returns False if nothing matched."""
        costs = budget.group(group).costs(kind)
        for index, cost in enumerate(costs):
            if cost.id == cost_id:
                del costs[index]
                return True
        return False
