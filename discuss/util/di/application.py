"""Application layer DI providers."""

from dishka import Scope, provide

from discuss.application.usecase.comment import (
    CountCommentsUseCase,
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentUseCase,
    GetRepliesUseCase,
    GetThreadUseCase,
    LikeCommentUseCase,
)
from discuss.application.usecase.moderation import (
    GetStatisticsUseCase,
    ListCommentsUseCase,
    ModerateCommentsUseCase,
    ModerateCommentUseCase,
    ResyncCommentUseCase,
    ResyncTargetUseCase,
)
from discuss.domain.service import (
    CommentPolicy,
    CommentService,
    CounterSync,
    TreeAssembler,
)
from discuss.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Comment use cases
    @provide
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide
    def get_get_comment_use_case(
        self, comment_service: CommentService
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_service=comment_service)

    @provide
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide
    def get_like_comment_use_case(
        self, comment_service: CommentService
    ) -> LikeCommentUseCase:
        """Provide like comment use case."""
        return LikeCommentUseCase(comment_service=comment_service)

    @provide
    def get_count_comments_use_case(
        self, comment_service: CommentService
    ) -> CountCommentsUseCase:
        """Provide count comments use case."""
        return CountCommentsUseCase(comment_service=comment_service)

    @provide
    def get_get_thread_use_case(self, tree_assembler: TreeAssembler) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(tree_assembler=tree_assembler)

    @provide
    def get_get_replies_use_case(
        self, tree_assembler: TreeAssembler
    ) -> GetRepliesUseCase:
        """Provide get replies use case."""
        return GetRepliesUseCase(tree_assembler=tree_assembler)

    # Moderation use cases
    @provide
    def get_moderate_comment_use_case(
        self, comment_service: CommentService
    ) -> ModerateCommentUseCase:
        """Provide moderate comment use case."""
        return ModerateCommentUseCase(comment_service=comment_service)

    @provide
    def get_moderate_comments_use_case(
        self, comment_service: CommentService
    ) -> ModerateCommentsUseCase:
        """Provide batch moderation use case."""
        return ModerateCommentsUseCase(comment_service=comment_service)

    @provide
    def get_list_comments_use_case(
        self, comment_service: CommentService, comment_policy: CommentPolicy
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(
            comment_service=comment_service, comment_policy=comment_policy
        )

    @provide
    def get_statistics_use_case(
        self, comment_service: CommentService, comment_policy: CommentPolicy
    ) -> GetStatisticsUseCase:
        """Provide statistics use case."""
        return GetStatisticsUseCase(
            comment_service=comment_service, comment_policy=comment_policy
        )

    @provide
    def get_resync_comment_use_case(
        self, counter_sync: CounterSync, comment_policy: CommentPolicy
    ) -> ResyncCommentUseCase:
        """Provide resync comment use case."""
        return ResyncCommentUseCase(
            counter_sync=counter_sync, comment_policy=comment_policy
        )

    @provide
    def get_resync_target_use_case(
        self, counter_sync: CounterSync, comment_policy: CommentPolicy
    ) -> ResyncTargetUseCase:
        """Provide resync target use case."""
        return ResyncTargetUseCase(
            counter_sync=counter_sync, comment_policy=comment_policy
        )
