# cli - Click CLI 및 콘솔 출력
