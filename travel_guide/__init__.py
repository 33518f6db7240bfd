"""Top-level package for the India travel guide.

The package answers free-text questions about a fixed catalog of
tourist places. Answers are grounded in the catalog: a question about
anything else gets a fixed refusal.

Typical use:

    from travel_guide.container import Container
    from travel_guide.services import QueryResolverService

    resolver = Container.create_default().resolve(QueryResolverService)
    result = await resolver.resolve("What are the timings of Taj Mahal?")
"""

__version__ = "0.1.0"
