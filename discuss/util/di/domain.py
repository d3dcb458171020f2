"""Domain layer DI providers."""

from dishka import Scope, provide

from discuss.config import CommentSettings, ModerationSettings
from discuss.domain.repository import (
    CommentRepository,
    LikeRepository,
    RelationRepository,
    UnitOfWork,
)
from discuss.domain.service import (
    CommentEventPublisher,
    CommentPolicy,
    CommentService,
    ContentDirectory,
    CounterSync,
    DefaultCommentPolicy,
    ModerationGate,
    ModerationPolicy,
    RelationIndex,
    SettingsModerationPolicy,
    TreeAssembler,
)
from discuss.domain.value import TargetType
from discuss.util.di.base import ProviderBase
from discuss.util.error import ConfigurationError


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_comment_policy(
        self, moderation_settings: ModerationSettings
    ) -> CommentPolicy:
        """Provide authorization policy."""
        return DefaultCommentPolicy(moderation_settings)

    @provide(scope=Scope.APP)
    def get_moderation_policy(
        self, comment_settings: CommentSettings
    ) -> ModerationPolicy:
        """Provide pre-moderation policy.

        Raises:
            ConfigurationError: If a review target type is not a known type
        """
        known = {t.value for t in TargetType}
        unknown = set(comment_settings.review_target_types) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown target types in COMMENTS__REVIEW_TARGET_TYPES: {sorted(unknown)}"
            )
        return SettingsModerationPolicy(comment_settings)

    @provide
    def get_relation_index(
        self,
        relation_repository: RelationRepository,
        comment_repository: CommentRepository,
    ) -> RelationIndex:
        """Provide closure table domain service."""
        return RelationIndex(
            relation_repository=relation_repository,
            comment_repository=comment_repository,
        )

    @provide
    def get_counter_sync(
        self,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        unit_of_work: UnitOfWork,
    ) -> CounterSync:
        """Provide counter maintenance domain service."""
        return CounterSync(
            comment_repository=comment_repository,
            like_repository=like_repository,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_moderation_gate(self, moderation_policy: ModerationPolicy) -> ModerationGate:
        """Provide status state machine."""
        return ModerationGate(moderation_policy=moderation_policy)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        unit_of_work: UnitOfWork,
        relation_index: RelationIndex,
        counter_sync: CounterSync,
        moderation_gate: ModerationGate,
        content_directory: ContentDirectory,
        comment_policy: CommentPolicy,
        event_publisher: CommentEventPublisher,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            like_repository=like_repository,
            unit_of_work=unit_of_work,
            relation_index=relation_index,
            counter_sync=counter_sync,
            moderation_gate=moderation_gate,
            content_directory=content_directory,
            comment_policy=comment_policy,
            event_publisher=event_publisher,
            comment_settings=comment_settings,
        )

    @provide
    def get_tree_assembler(
        self,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        relation_index: RelationIndex,
        comment_settings: CommentSettings,
    ) -> TreeAssembler:
        """Provide thread view domain service."""
        return TreeAssembler(
            comment_repository=comment_repository,
            like_repository=like_repository,
            relation_index=relation_index,
            comment_settings=comment_settings,
        )
