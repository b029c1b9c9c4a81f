from django.test import SimpleTestCase

from apps.job.specs import JobSpecs


class JobSpecsTests(SimpleTestCase):
    def test_aliases_fold_onto_canonical_names(self):
        specs = JobSpecs.from_dict(
            {"paper": "80lb matte", "inkColors": "4/4", "bindery": "Saddle stitch"}
        )

        self.assertEqual(specs.paperType, "80lb matte")
        self.assertEqual(specs.colors, "4/4")
        self.assertEqual(specs.finishing, "Saddle stitch")

    def test_canonical_name_wins_over_alias(self):
        specs = JobSpecs.from_dict({"paper": "old", "paperType": "new"})

        self.assertEqual(specs.paperType, "new")

    def test_unknown_keys_survive_a_round_trip(self):
        data = {"productType": "Flyer", "pantone": "PMS 185"}

        specs = JobSpecs.from_dict(data)

        self.assertEqual(specs.extra, {"pantone": "PMS 185"})
        self.assertEqual(specs.to_dict(), data)

    def test_empty_input(self):
        self.assertEqual(JobSpecs.from_dict(None).to_dict(), {})

    def test_vendor_view_hides_rfq_traceability(self):
        view = JobSpecs(productType="Catalog", rfqNumber="RFQ-20260101-001").vendor_view()

        self.assertEqual(view["productType"], "Catalog")
        self.assertEqual(view["paperType"], "")
        self.assertNotIn("rfqNumber", view)
        self.assertNotIn("rfqSpecs", view)
        self.assertNotIn("extra", view)
