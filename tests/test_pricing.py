from __future__ import annotations

import unittest

from quota_engine.application.dto.pricing import GetPricingInput
from quota_engine.application.use_cases.get_pricing import GetPricingUseCase
from quota_engine.domain.exceptions import PricingInputError
from quota_engine.domain.services.pricing import (
    checkout_price_id,
    currency_for_locale,
    format_price,
    plan_price,
    team_starting_price,
    validate_team_quantity,
)


PRICE_IDS = {
    "pro:USD:monthly": "price_pro_usd_m",
    "pro:CNY:yearly": "price_pro_cny_y",
    "team:EUR:monthly": "price_team_eur_m",
}


class CurrencyForLocaleTests(unittest.TestCase):
    def test_locale_prefixes(self):
        self.assertEqual(currency_for_locale("zh"), "CNY")
        self.assertEqual(currency_for_locale("zh-CN"), "CNY")
        self.assertEqual(currency_for_locale("de-AT"), "EUR")
        self.assertEqual(currency_for_locale("en"), "USD")
        self.assertEqual(currency_for_locale("fr"), "USD")
        self.assertEqual(currency_for_locale(None), "USD")


class PlanPriceTests(unittest.TestCase):
    def test_free_and_trial_are_zero(self):
        for plan_id in ("free", "trial"):
            price = plan_price(plan_id, "EUR")
            self.assertEqual((price.monthly, price.yearly), (0, 0))

    def test_enterprise_is_contact_sales(self):
        for currency in ("USD", "CNY", "EUR"):
            price = plan_price("enterprise", currency)
            self.assertIsNone(price.monthly)
            self.assertIsNone(price.yearly)

    def test_team_is_starting_price(self):
        price = plan_price("team", "CNY")
        self.assertEqual(price.monthly, 3 * 239)
        self.assertEqual(price.yearly, 3 * 2390)
        self.assertEqual(team_starting_price("USD", "monthly"), 105)

    def test_pro_table_lookup(self):
        price = plan_price("pro", "USD")
        self.assertEqual((price.monthly, price.yearly), (29, 290))

    def test_unknown_plan_priced_as_free(self):
        price = plan_price("legacy", "USD")
        self.assertEqual((price.monthly, price.yearly), (0, 0))

    def test_unknown_currency_rejected(self):
        with self.assertRaises(PricingInputError):
            plan_price("pro", "GBP")


class CheckoutPriceIdTests(unittest.TestCase):
    def test_non_self_serve_plans_have_no_price_id(self):
        for plan_id in ("free", "trial", "enterprise"):
            self.assertIsNone(checkout_price_id(plan_id, "monthly", "USD", price_ids=PRICE_IDS))

    def test_lookup_by_plan_currency_interval(self):
        self.assertEqual(checkout_price_id("pro", "monthly", price_ids=PRICE_IDS), "price_pro_usd_m")
        self.assertEqual(checkout_price_id("pro", "yearly", "CNY", price_ids=PRICE_IDS), "price_pro_cny_y")
        self.assertEqual(checkout_price_id("team", "monthly", "EUR", price_ids=PRICE_IDS), "price_team_eur_m")

    def test_unconfigured_price_id_is_none(self):
        self.assertIsNone(checkout_price_id("team", "yearly", "USD", price_ids=PRICE_IDS))

    def test_invalid_interval_rejected(self):
        with self.assertRaises(PricingInputError):
            checkout_price_id("pro", "weekly", price_ids=PRICE_IDS)


class TeamQuantityTests(unittest.TestCase):
    def test_minimum_seats(self):
        self.assertEqual(validate_team_quantity(3), 3)
        with self.assertRaises(PricingInputError):
            validate_team_quantity(2)


class FormatPriceTests(unittest.TestCase):
    def test_symbol_placement(self):
        self.assertEqual(format_price(29, "USD"), "$29")
        self.assertEqual(format_price(1990, "CNY"), "¥1,990")
        self.assertEqual(format_price(1990, "EUR"), "1.990 €")
        self.assertEqual(format_price(None, "USD"), "Contact sales")


class GetPricingUseCaseTests(unittest.TestCase):
    def setUp(self):
        self.use_case = GetPricingUseCase(checkout_price_ids={"team:EUR:yearly": "price_team_eur_yearly"})

    def test_locale_selects_currency_and_explicit_currency_wins(self):
        by_locale = self.use_case.execute(GetPricingInput(locale="de-DE", interval="yearly"))
        explicit = self.use_case.execute(GetPricingInput(locale="de-DE", currency="USD"))

        self.assertEqual(by_locale.currency, "EUR")
        self.assertEqual(explicit.currency, "USD")

    def test_plans_listed_in_catalog_order(self):
        output = self.use_case.execute(GetPricingInput(locale="de-DE", interval="yearly"))

        self.assertEqual(
            [plan.plan_id for plan in output.plans],
            ["free", "trial", "pro", "team", "enterprise"],
        )
        team = output.plans[3]
        self.assertEqual(team.yearly, 900)
        self.assertEqual(team.display_price, "900 €")
        self.assertTrue(team.per_user)
        self.assertEqual(team.min_users, 3)
        self.assertEqual(team.checkout_price_id, "price_team_eur_yearly")
        self.assertEqual(output.plans[1].trial_days, 14)
        self.assertEqual(output.plans[4].display_price, "Contact sales")

    def test_unknown_interval_rejected(self):
        with self.assertRaises(PricingInputError):
            self.use_case.execute(GetPricingInput(locale=None, interval="weekly"))


if __name__ == "__main__":
    unittest.main()
