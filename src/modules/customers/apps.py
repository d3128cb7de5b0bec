from django.apps import AppConfig


class CustomersConfig(AppConfig):
    name = "modules.customers"
    label = "customers"

    def ready(self) -> None:
        from modules.customers.repositories.in_memory import (
            InMemoryCustomerRepository,
        )

        # One store per process; views receive it through their constructor.
        self.repository = InMemoryCustomerRepository()
