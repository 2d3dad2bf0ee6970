from property_dedupe.runners.local import LocalReconcilePipeline, build_pipeline, reconcile

__all__ = ["LocalReconcilePipeline", "build_pipeline", "reconcile"]
