import random

from prop_sim.rule_engine import DrawdownType, ParameterSet
from prop_sim.simulator import run, simulate


params = ParameterSet(
    avg_win=200,
    avg_loss=100,
    win_rate=45,
    account_size=10000,
    number_of_trades=100,
    is_prop_firm=True,
    max_drawdown_percent=10,
    max_daily_loss_percent=2,
    trades_per_day=5,
    drawdown_type=DrawdownType.TRAILING_UNTIL_INITIAL,
)

result = simulate(params.validate(), random.Random(7))
print("Final balance:", round(result.final_balance, 2))
print("Trades taken:", result.actual_trades_taken, "of", params.number_of_trades)
print("Account blown:", result.is_account_blown)
print("Max drawdown %:", round(result.max_drawdown_percent, 2))
if result.prop_firm_stats is not None:
    stats = result.prop_firm_stats
    print("Days traded:", stats.day_count)
    print("Daily loss breaches:", stats.daily_loss_breaches)
    if stats.breach_day is not None:
        print("Drawdown breached on day", stats.breach_day.day)

batch_params = ParameterSet(
    avg_win=200,
    avg_loss=100,
    win_rate=45,
    account_size=10000,
    number_of_trades=100,
    is_prop_firm=True,
    drawdown_type=DrawdownType.TRAILING_UNTIL_INITIAL,
    simulation_runs=500,
)
batch = run(batch_params, seed=7)
print("Fail rate %:", round(batch.fail_rate_percent, 2))
