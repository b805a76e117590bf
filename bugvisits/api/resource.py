# bugvisits/api/resource.py
from bugvisits.services.last_visit import BatchVisitWriter, VisitReader
from bugvisits.utils.projection import ResultProjector


class BugUserLastVisitResource:
    """Find and store the last time the acting user visited bugs."""

    def __init__(self, ctx, writer=None, reader=None):
        self.ctx = ctx
        self.writer = writer or BatchVisitWriter(ctx)
        self.reader = reader or VisitReader(ctx)

    def update(self, params) -> list[dict]:
        """Set the last visit time of every bug in `params.ids` to now."""
        records = self.writer.update(params.ids)
        return ResultProjector.from_params(params).render(records)

    def get(self, params) -> list[dict]:
        """Last visit times for `params.ids`, or for every visited bug."""
        records = self.reader.get(params.ids)
        return ResultProjector.from_params(params).render(records)
