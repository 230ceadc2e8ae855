from typing import Any, List, Optional
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import AssetNotFoundError
from app.models import BrandAsset
from app.services.storage import BlobStorage, StorageError

logger = logging.getLogger(__name__)


class AssetService:
    @staticmethod
    def get_assets(
        db: Session,
        user_id: str,
        asset_type: str = "logo",
        brand_profile_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[BrandAsset]:
        """Assets of one type for a user, newest first"""
        query = db.query(BrandAsset).filter(
            BrandAsset.user_id == user_id,
            BrandAsset.asset_type == asset_type,
        )
        if brand_profile_id:
            query = query.filter(BrandAsset.brand_profile_id == brand_profile_id)
        return (
            query.order_by(BrandAsset.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    @staticmethod
    def get_assets_by_ids(db: Session, user_id: str, asset_ids: List[str]) -> List[BrandAsset]:
        """Assets in the order of ``asset_ids``, skipping ids the user does not own"""
        if not asset_ids:
            return []
        rows = db.query(BrandAsset).filter(
            BrandAsset.id.in_(asset_ids),
            BrandAsset.user_id == user_id,
        ).all()
        by_id = {asset.id: asset for asset in rows}
        return [by_id[asset_id] for asset_id in asset_ids if asset_id in by_id]

    @staticmethod
    def get_asset(db: Session, asset_id: str, user_id: str) -> BrandAsset:
        asset = db.query(BrandAsset).filter(
            BrandAsset.id == asset_id,
            BrandAsset.user_id == user_id,
        ).first()
        if asset is None:
            raise AssetNotFoundError()
        return asset

    @staticmethod
    def create_asset(db: Session, **fields: Any) -> BrandAsset:
        asset = BrandAsset(**fields)
        db.add(asset)
        db.commit()
        db.refresh(asset)
        return asset

    @staticmethod
    def set_primary(db: Session, asset_id: str, user_id: str) -> BrandAsset:
        """
        Make one asset the primary of its (user, brand profile, asset type) scope.

        A single UPDATE sets ``is_primary`` to whether the row is the target,
        so concurrent toggles cannot leave two primaries behind.
        """
        asset = AssetService.get_asset(db, asset_id, user_id)

        scope = db.query(BrandAsset).filter(
            BrandAsset.user_id == user_id,
            BrandAsset.asset_type == asset.asset_type,
        )
        if asset.brand_profile_id is None:
            scope = scope.filter(BrandAsset.brand_profile_id.is_(None))
        else:
            scope = scope.filter(BrandAsset.brand_profile_id == asset.brand_profile_id)

        scope.update(
            {BrandAsset.is_primary: BrandAsset.id == asset.id},
            synchronize_session=False,
        )
        db.commit()
        db.refresh(asset)
        return asset

    @staticmethod
    def delete_asset(db: Session, storage: BlobStorage, asset_id: str, user_id: str) -> None:
        """Remove the stored blob, then the row. A failed blob removal is logged, not fatal."""
        asset = AssetService.get_asset(db, asset_id, user_id)

        if asset.file_path:
            try:
                storage.remove(asset.file_path)
            except StorageError as e:
                logger.error(f"Storage deletion error for asset {asset_id}: {e}")

        db.delete(asset)
        db.commit()
