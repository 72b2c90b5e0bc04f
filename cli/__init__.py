# cli - Click CLI 계층
