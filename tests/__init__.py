TEST_PROVIDER_KEY = "pplx-test-key"
