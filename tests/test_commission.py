import pytest

from backtestkit.commission import Commission, FixedCommission


def test_fixed_commission_ignores_size_and_price():
    model = FixedCommission(2.5)
    assert model.calculate(1, 10.0) == 2.5
    assert model.calculate(1000, 0.01) == 2.5


def test_fixed_commission_defaults_to_zero():
    assert FixedCommission().calculate(5, 5.0) == 0.0


def test_commission_is_abstract():
    with pytest.raises(TypeError):
        Commission()


def test_custom_commission_subclass_alongside_fixed():
    class Proportional(Commission):
        def calculate(self, quantity, price):
            return quantity * price * 0.5

    models = [FixedCommission(1.0), Proportional()]
    fees = [model.calculate(2, 4.0) for model in models]
    assert fees == [1.0, 4.0]
    assert sum(fees) == 5.0